"""Storage package - backend selection and per-app lookup."""
import logging

from flask import current_app

from jelly.storage.base import Storage
from jelly.storage.memory import MemoryStorage
from jelly.storage.views import ArticleQuery

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'jelly.storage'


def build_storage(app):
    """Create the backend named by ``STORAGE_BACKEND``."""
    backend = app.config.get('STORAGE_BACKEND', 'memory')
    if backend == 'database':
        # Imported here: the SQL backend pulls in the models, which import views.
        from jelly.storage.database import DatabaseStorage
        logger.info("Using database storage")
        return DatabaseStorage()
    if backend != 'memory':
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
    logger.info("Using in-memory storage")
    return MemoryStorage()


def get_storage():
    """Storage instance bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = ['Storage', 'MemoryStorage', 'ArticleQuery', 'build_storage', 'get_storage', 'EXTENSION_KEY']
