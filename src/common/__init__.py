# Common utilities and shared modules
"""
Shared components used by the content renderer and site writer:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, POSTS_DIR, PUBLIC_DIR
from .logging import set_log_level, setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "POSTS_DIR",
    "PUBLIC_DIR",
    "set_log_level",
    "setup_logging",
]
