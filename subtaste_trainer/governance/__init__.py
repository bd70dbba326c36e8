# Governance metrics over the recent signal log: velocity and trust.
# Deterministic; no I/O.

from subtaste_trainer.governance.scorer import (
    GovernanceMetrics,
    compute_governance,
    round_half_up,
)

__all__ = [
    "GovernanceMetrics",
    "compute_governance",
    "round_half_up",
]
