import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "Card Market")

    # Database
    POSTGRES_CONNECTION_STRING: str = os.getenv("POSTGRES_CONNECTION_STRING", "")
    DEFAULT_DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./card_market.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"
    CREATE_TABLES_ON_STARTUP: bool = os.getenv("CREATE_TABLES_ON_STARTUP", "true").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def DATABASE_URL(self) -> str:
        """Асинхронный URL для приложения"""
        if self.POSTGRES_CONNECTION_STRING:
            return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql+asyncpg://")
        return self.DEFAULT_DATABASE_URL

    @property
    def SYNC_DATABASE_URL(self) -> str:
        """Синхронный URL для Alembic"""
        if self.POSTGRES_CONNECTION_STRING:
            return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql://")
        return (
            self.DEFAULT_DATABASE_URL
            .replace("postgresql+asyncpg://", "postgresql://")
            .replace("sqlite+aiosqlite://", "sqlite://")
        )


settings = Settings()
