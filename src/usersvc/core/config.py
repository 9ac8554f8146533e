"""
Application configuration management using Pydantic Settings.

This module centralizes all environment-based configuration for the application,
providing type-safe access to configuration values with validation.
"""

from typing import Optional, Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

from usersvc.core.exceptions import ConfigurationException

logger = logging.getLogger('CORE_CONFIG')


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        # Database Configuration
        database_url: Complete async database URL (if provided directly)
        db_driver: SQLAlchemy async driver used when building the URL
            (asyncpg ships as a core dependency for the default)
        db_username: Database username
        db_password: Database password
        db_host: Database host
        db_endpoint: AWS RDS endpoint (alternative to db_host)
        db_port: Database port
        db_name: Database name

        # Connection Pool Settings
        db_pool_size: Database connection pool size
        db_max_overflow: Maximum overflow connections
        db_pool_timeout: Pool checkout timeout in seconds
        db_pool_recycle: Connection recycle time in seconds

        # Logging
        log_level: Level for the usersvc loggers
        log_format: Format string for the usersvc stream handler
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",  # Allow extra fields from environment
    )

    # Database Configuration
    database_url: Optional[str] = None
    db_driver: str = "postgresql+asyncpg"
    db_username: str = "postgres"
    db_password: Optional[str] = None
    db_host: Optional[str] = None
    db_endpoint: Optional[str] = None  # AWS RDS style
    db_port: str = "5432"
    db_name: Optional[str] = None

    # Connection Pool Settings
    db_pool_size: int = 20
    db_max_overflow: int = 30
    db_pool_timeout: int = 10
    db_pool_recycle: int = 3600
    db_pool_pre_ping: bool = True
    db_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def get_database_address(self) -> Tuple[str, str]:
        """
        Resolve the database host and port, parsing DB_ENDPOINT if necessary.

        A numeric port suffix on DB_ENDPOINT is used unless db_port was set
        explicitly (by argument or DB_PORT).

        Returns:
            tuple: (host, port)

        Raises:
            ConfigurationException: If no host configuration is found
        """
        if self.db_endpoint:
            if ":" in self.db_endpoint:
                potential_host, potential_port = self.db_endpoint.rsplit(":", 1)
                if potential_port.isdigit():
                    if "db_port" in self.model_fields_set:
                        return potential_host, self.db_port
                    return potential_host, potential_port
            # No numeric port suffix, the whole endpoint is the host
            return self.db_endpoint, self.db_port

        if self.db_host:
            return self.db_host, self.db_port

        raise ConfigurationException("Database host configuration missing (DB_HOST or DB_ENDPOINT)")

    def get_database_host(self) -> str:
        """Database host address."""
        return self.get_database_address()[0]

    def get_database_port(self) -> str:
        """Database port, taking an endpoint port into account."""
        return self.get_database_address()[1]

    def get_database_url(self) -> str:
        """
        Construct the database URL from components or return direct URL.

        Returns:
            str: Async SQLAlchemy database URL

        Raises:
            ConfigurationException: If required configuration is missing
        """
        if self.database_url:
            return self.database_url

        missing = []
        if not self.db_username:
            missing.append("DB_USERNAME")
        if not self.db_password:
            missing.append("DB_PASSWORD")
        if not self.db_name:
            missing.append("DB_NAME")

        try:
            db_host, db_port = self.get_database_address()
        except ConfigurationException:
            missing.append("DB_HOST or DB_ENDPOINT")
            db_host = db_port = None

        if missing:
            raise ConfigurationException(
                f"Database configuration incomplete. Missing: {', '.join(missing)}",
                {"missing": missing},
            )

        return f"{self.db_driver}://{self.db_username}:{self.db_password}@{db_host}:{db_port}/{self.db_name}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings object
    """
    return Settings()
