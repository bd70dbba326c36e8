from subtaste_trainer.core.exceptions import (
    InvalidSelectionError,
    PartialPairError,
    SessionBusyError,
    SignalEmissionError,
    TasteApiError,
    TrainerError,
)

__all__ = [
    "InvalidSelectionError",
    "PartialPairError",
    "SessionBusyError",
    "SignalEmissionError",
    "TasteApiError",
    "TrainerError",
]
