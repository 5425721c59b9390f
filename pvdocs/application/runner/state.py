"""Thread-safe task list and progress counters for the active batch run."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from pvdocs.domain.entities.batch_progress import BatchProgress
from pvdocs.domain.entities.ocr_task import OcrTask
from pvdocs.domain.exceptions import BatchRunActiveError
from pvdocs.domain.value_objects.extraction_outcome import (
    ExtractionCancelled,
    ExtractionOutcome,
)
from pvdocs.domain.value_objects.task_status import TaskState


@dataclass(frozen=True)
class BatchOcrSnapshot:
    """Consistent point-in-time copy of the run state for observers."""

    tasks: Tuple[OcrTask, ...]
    progress: BatchProgress
    is_running: bool

    def to_dict(self) -> dict:
        return {
            "isRunning": self.is_running,
            "progress": self.progress.to_dict(),
            "tasks": [task.to_dict() for task in self.tasks],
        }


class BatchRunState:
    """
    Shared mutable state of one controller.

    Every read-modify-write on a task or counter happens under one lock, so
    concurrent workers never lose an update.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: List[OcrTask] = []
        self._progress = BatchProgress.empty()
        self._running = False

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def begin(self, tasks: Sequence[OcrTask], progress: BatchProgress) -> None:
        """Install a fresh batch and mark it running."""
        with self._lock:
            if self._running:
                raise BatchRunActiveError("start a batch")
            self._tasks = list(tasks)
            self._progress = progress
            self._running = True

    def finish(self) -> None:
        with self._lock:
            self._running = False

    def reset(self) -> None:
        with self._lock:
            if self._running:
                raise BatchRunActiveError("reset")
            self._tasks = []
            self._progress = BatchProgress.empty()

    def mark_processing(self, index: int) -> OcrTask:
        return self._update_task(index, lambda task: task.mark_processing())

    def record_outcome(self, index: int, outcome: ExtractionOutcome, cancelled: bool = False) -> OcrTask:
        """
        Write a worker's outcome into the task at ``index`` and bump counters.

        A task whose run was cancelled while it was in flight ends as skipped,
        whatever the extraction call returned.
        """
        if cancelled and not isinstance(outcome, ExtractionCancelled):
            outcome = ExtractionCancelled()
        with self._lock:
            task = self._tasks[index].apply_outcome(outcome)
            if task.state == TaskState.SUCCESS:
                self._progress = self._progress.record_success()
            elif task.state == TaskState.ERROR:
                self._progress = self._progress.record_error()
            else:
                self._progress = self._progress.record_cancelled()
            self._tasks[index] = task
            return task

    def cancel_pending(self) -> int:
        """Mark every task nobody claimed as skipped; return how many."""
        with self._lock:
            cancelled = 0
            for index, task in enumerate(self._tasks):
                if task.state == TaskState.PENDING:
                    self._tasks[index] = task.mark_cancelled()
                    self._progress = self._progress.record_cancelled()
                    cancelled += 1
            return cancelled

    def snapshot(self) -> BatchOcrSnapshot:
        with self._lock:
            return BatchOcrSnapshot(
                tasks=tuple(self._tasks),
                progress=self._progress,
                is_running=self._running,
            )

    def _update_task(self, index: int, change: Callable[[OcrTask], OcrTask]) -> OcrTask:
        with self._lock:
            task = change(self._tasks[index])
            self._tasks[index] = task
            return task
