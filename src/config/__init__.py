"""Configuration module -- exports the Settings value object."""

from src.config.settings import Settings

__all__ = ["Settings"]
