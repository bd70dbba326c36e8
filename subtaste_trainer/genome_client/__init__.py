"""
Genome client package: port and adapters for the external genome engine.
"""

from subtaste_trainer.genome_client.memory import InMemoryGenomeStore
from subtaste_trainer.genome_client.ports import GenomePort
from subtaste_trainer.genome_client.taste_api import TasteApiClient

__all__ = ["GenomePort", "InMemoryGenomeStore", "TasteApiClient"]
