"""Core configuration and component factory."""

from docfill.core.config import Settings, get_settings
from docfill.core.factory import ComponentFactory

__all__ = ["ComponentFactory", "Settings", "get_settings"]
