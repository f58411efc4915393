"""Dependency injection with a singleton service manager.

The mapping store and the shortening service live for the whole process, so
they are created once by ServiceManager and handed to routes through FastAPI
dependencies. Tests swap them out with ``app.dependency_overrides``.
"""

import logging
from typing import Optional

from fastapi import Depends

from shortener.config import Settings, get_settings
from shortener.service import ShorteningService
from shortener.storage import InMemoryMappingStore, MappingStore

LOGGER_NAME = "urlshortener"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Configure the shared ``urlshortener`` logger once."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


# ============================================================================
# SINGLETON SERVICE MANAGER
# ============================================================================


class ServiceManager:
    """Singleton service manager for shared resources.

    Holds the settings, the logger, the mapping store and the shortening
    service. The counter lives inside the service, so it is reset only by
    ``cleanup()`` followed by a fresh ``initialize()``.
    """

    _instance: Optional["ServiceManager"] = None
    _initialized: bool = False

    def __new__(cls) -> "ServiceManager":
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def initialize(self, store: Optional[MappingStore] = None) -> None:
        """Initialize shared resources once at startup."""
        if not self._initialized:
            self.settings: Settings = get_settings()
            self.logger = setup_logger(self.settings.LOG_LEVEL)
            self.store = store if store is not None else InMemoryMappingStore()
            self.service = ShorteningService(self.store, logger=self.logger)
            self._initialized = True

    def cleanup(self) -> None:
        """Drop shared resources at shutdown."""
        for attr in ("service", "store"):
            if hasattr(self, attr):
                delattr(self, attr)
        self._initialized = False


# Global singleton instance
_service_manager = ServiceManager()


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


def get_service_manager() -> ServiceManager:
    """Get the initialized singleton service manager."""
    if not _service_manager._initialized:
        _service_manager.initialize()
    return _service_manager


def get_shortening_service(manager: ServiceManager = Depends(get_service_manager)) -> ShorteningService:
    return manager.service
