"""chainql drivers: execution ports that turn compiled SQL into rows."""
from chainql.drivers.base import Driver, Row
from chainql.drivers.config import PostgresConfig, SQLiteConfig
from chainql.drivers.postgres import PostgresDriver
from chainql.drivers.sqlite import SQLiteDriver

__all__ = [
    "Driver",
    "Row",
    "PostgresConfig",
    "PostgresDriver",
    "SQLiteConfig",
    "SQLiteDriver",
]
