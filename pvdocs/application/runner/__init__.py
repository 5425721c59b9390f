"""Batch OCR run engine: cancellation, shared run state, worker pool and controller."""
from .cancellation import CancellationToken
from .controller import BatchOcrController, BatchStartResult
from .pool import ExtractionClient, WorkerPool
from .state import BatchOcrSnapshot, BatchRunState

__all__ = [
    "BatchOcrController",
    "BatchOcrSnapshot",
    "BatchRunState",
    "BatchStartResult",
    "CancellationToken",
    "ExtractionClient",
    "WorkerPool",
]
