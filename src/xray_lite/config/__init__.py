"""Configuration for the X-Ray client.

Settings come from environment variables (optionally seeded from .env files)
and are validated with Pydantic.
"""

from xray_lite.config.env_loader import load_env_files
from xray_lite.config.settings import XRaySettings, get_settings, load_settings

__all__ = [
    "XRaySettings",
    "get_settings",
    "load_settings",
    "load_env_files",
]
