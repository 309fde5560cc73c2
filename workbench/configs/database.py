"""
Database configuration settings.

PostgreSQL connection parameters for the async SQLAlchemy engine.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

from workbench.configs.base import settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("POSTGRES_")

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="workbench", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="prefer", description="libpq sslmode for database connections")

    def _url(self, drivername: str, query: dict[str, str]) -> URL:
        return URL.create(
            drivername=drivername,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query=query,
        )

    @property
    def async_database_url(self) -> URL:
        """
        asyncpg URL.

        asyncpg takes ``ssl`` instead of libpq's ``sslmode``; only
        ``require`` is forwarded.
        """
        query = {"ssl": "require"} if self.sslmode == "require" else {}
        return self._url("postgresql+asyncpg", query)
