"""Core module for the URL shortener service."""

from shorturl.core.config import settings

__all__ = ["settings"]
