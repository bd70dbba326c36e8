"""
Structured logging for the Subtaste trainer.

JSON logs with timestamp, profile_id, event_type, set_id.
Use get_logger() in all trainer modules.
"""

from subtaste_trainer.trainer_logging.logger import bind_profile, get_logger

__all__ = ["bind_profile", "get_logger"]
