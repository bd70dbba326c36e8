"""
Configuration management for the Subtaste trainer.

Loads and validates settings from environment variables and an optional .env
file. Exposes a single source of truth for API, sampling and routing settings.
"""

from subtaste_trainer.config.settings import TrainerSettings, get_settings  # noqa: F401

__all__ = ["TrainerSettings", "get_settings"]
