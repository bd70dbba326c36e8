"""
Subtaste trainer: adaptive forced-choice preference sampler.

Draws non-redundant cards of four mutually exclusive prompts, turns a user's
best/worst ranking (or a skip) into preference signals for the external genome
engine, and derives velocity and trust metrics from the recent signal log.
Pure sampling/scoring core with a thin async orchestration layer on top.
"""

__version__ = "0.1.0"
