"""
Data Transfer Objects for batch OCR commands and queries.

These DTOs serve as the boundary between the application layer and external layers (API, UI).
They are simple, serializable data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pvdocs.application.runner.controller import BatchStartResult
from pvdocs.application.runner.state import BatchOcrSnapshot


@dataclass(frozen=True)
class BatchStartDTO:
    """DTO for the result of starting a batch."""

    started: bool
    processed: int = 0
    already_processed: int = 0
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: BatchStartResult) -> "BatchStartDTO":
        return cls(
            started=result.started,
            processed=result.processed,
            already_processed=result.already_processed,
            message=result.message,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started": self.started,
            "processed": self.processed,
            "alreadyProcessed": self.already_processed,
            "message": self.message,
        }


@dataclass(frozen=True)
class BatchStatusDTO:
    """DTO for live batch state: running flag, counters and task list."""

    is_running: bool
    progress: Dict[str, Any]
    tasks: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: BatchOcrSnapshot) -> "BatchStatusDTO":
        return cls(
            is_running=snapshot.is_running,
            progress=snapshot.progress.to_dict(),
            tasks=[task.to_dict() for task in snapshot.tasks],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isRunning": self.is_running,
            "progress": dict(self.progress),
            "tasks": list(self.tasks),
        }


@dataclass(frozen=True)
class DocumentDatesDTO:
    """DTO for dates found in OCR text."""

    candidates: List[Dict[str, Any]]
    best: Dict[str, Optional[str]]
