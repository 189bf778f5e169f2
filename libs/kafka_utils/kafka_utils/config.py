"""Kafka client configuration."""


def client_config(bootstrap_servers: str, username: str | None = None, password: str | None = None) -> dict:
    """Build the settings shared by every Kafka client of a service.

    SASL/PLAIN authentication is enabled only when both credentials are set.
    """
    config = {"bootstrap.servers": bootstrap_servers}
    if username and password:
        config.update(
            {
                "security.protocol": "SASL_PLAINTEXT",
                "sasl.mechanism": "PLAIN",
                "sasl.username": username,
                "sasl.password": password,
            }
        )
    return config
