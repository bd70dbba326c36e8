"""
Trainer package: async orchestration of card resolution and the CLI.
"""

from subtaste_trainer.trainer.session import TrainingSession

__all__ = ["TrainingSession"]
