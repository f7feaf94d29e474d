from pathlib import Path
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from logging_config import setup_logging
from settings_service import SettingsService

logger = setup_logging(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent

# =============================================================================
# Database Configuration
# =============================================================================

# Serializes engine creation so concurrent first lookups share one engine per alias
_ENGINE_LOCK = threading.Lock()


class DatabaseConfig:
    """Resolves a database alias from settings.toml to a shared SQLAlchemy engine.

    Engines are created lazily and shared per alias across every
    DatabaseConfig instance in the process.
    """

    _engines: dict[str, Engine] = {}

    def __init__(self, alias: str | None = None, dialect: str = "sqlite", url: str | None = None):
        settings = SettingsService()
        if url is not None:
            self.alias = alias or url
            self.path = None
            self.url = url
        else:
            alias = alias or settings.db_alias
            db_paths = settings.db_paths
            if alias not in db_paths:
                raise ValueError(
                    f"Unknown database alias '{alias}'. "
                    f"Available: {list(db_paths.keys())}"
                )
            self.alias = alias
            path = Path(db_paths[alias])
            self.path = str(path if path.is_absolute() else PROJECT_ROOT / path)
            self.url = f"{dialect}:///{self.path}"

    @classmethod
    def from_url(cls, url: str, alias: str | None = None) -> "DatabaseConfig":
        """Build a config for an explicit SQLAlchemy URL (tests, ad-hoc files)."""
        return cls(alias=alias, url=url)

    @property
    def engine(self) -> Engine:
        eng = DatabaseConfig._engines.get(self.alias)
        if eng is None:
            with _ENGINE_LOCK:
                eng = DatabaseConfig._engines.get(self.alias)
                if eng is None:
                    eng = create_engine(self.url)
                    DatabaseConfig._engines[self.alias] = eng
                    logger.info(f"created engine for alias '{self.alias}'")
        return eng

    @classmethod
    def dispose_all(cls) -> None:
        """Dispose every shared engine and forget them."""
        with _ENGINE_LOCK:
            for eng in cls._engines.values():
                eng.dispose()
            cls._engines.clear()

    def __repr__(self) -> str:
        return f"DatabaseConfig(alias={self.alias!r}, url={self.url!r})"
