from __future__ import annotations

from sqlalchemy.engine import URL

from src.engine.ports.connectors import ConnectorConfig

# SQLAlchemy async dialect+driver per relational connector
DRIVERS: dict[str, str] = {
    "mysql": "mysql+aiomysql",
    "postgres": "postgresql+asyncpg",
    "sqlserver": "mssql+aioodbc",
}


def connection_url(driver: str, config: ConnectorConfig) -> URL:
    """Build the connection URL a real driver would use. Never connects."""
    port = (config.get("port") or "").strip()
    return URL.create(
        driver,
        username=config.get("user") or None,
        password=config.get("password") or None,
        host=config.get("host") or None,
        port=int(port) if port.isdigit() else None,
        database=config.get("database") or None,
    )


def masked_url(driver: str, config: ConnectorConfig) -> str:
    return connection_url(driver, config).render_as_string(hide_password=True)
