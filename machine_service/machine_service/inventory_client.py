"""HTTP client for the Inventory Service ledger."""

import requests
from pydantic import ValidationError

from .schemas import Stock


class InventoryError(Exception):
    """The Inventory Service could not be reached or refused the request."""


class InventoryClient:
    """Reads and reserves stock through ``/fill``."""

    def __init__(self, base_url: str, timeout: float = 5.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def fill_url(self) -> str:
        return f"{self.base_url}/fill"

    def get_stock(self) -> Stock:
        """Fetch current stock with ``GET /fill``.

        Raises:
            InventoryError: On transport failure, a non-2xx status, or a malformed payload.
        """
        return self._call("GET")

    def reserve(self, beans: int, milk: int) -> Stock:
        """Deduct ingredients with ``DELETE /fill``.

        Raises:
            InventoryError: On transport failure, a rejected reservation, or a malformed payload.
        """
        return self._call("DELETE", json={"beans": beans, "milk": milk})

    def _call(self, method: str, json: dict | None = None) -> Stock:
        try:
            response = self.session.request(method, self.fill_url, json=json, timeout=self.timeout)
            response.raise_for_status()
            return Stock.model_validate(response.json())
        except requests.HTTPError as e:
            raise InventoryError(f"{method} /fill returned {e.response.status_code}: {e.response.text}") from e
        except requests.RequestException as e:
            raise InventoryError(f"{method} /fill failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise InventoryError(f"{method} /fill returned a malformed payload: {e}") from e
