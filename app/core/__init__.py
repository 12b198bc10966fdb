"""Core app configuration, database and security primitives."""

from app.core.config import get_settings, get_token_config, settings
from app.core.database import get_db

__all__ = ["get_settings", "get_token_config", "settings", "get_db"]
