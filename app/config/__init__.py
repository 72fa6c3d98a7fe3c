"""
Configuration package for the hotel booking core.

This package contains the configuration modules for the application:
environment settings, database connections and logging.
"""

from app.config.settings import settings, get_settings
from app.config.database import get_db_session, get_db_context, init_db

__all__ = ['settings', 'get_settings', 'get_db_session', 'get_db_context', 'init_db']
