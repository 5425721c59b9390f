"""Bounded-concurrency driver for the needs-processing part of a batch."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Protocol

from pvdocs.domain.value_objects.extraction_outcome import ExtractionFailed, ExtractionOutcome

from .cancellation import CancellationToken
from .state import BatchRunState

logger = logging.getLogger(__name__)


class ExtractionClient(Protocol):
    def extract(
        self,
        document_id: str,
        doc_type_code: Optional[str],
        cancellation: CancellationToken,
    ) -> ExtractionOutcome: ...


class WorkerPool:
    """
    Fixed-width pool of workers sharing one cursor over the task list.

    Tasks ``0 .. task_count - 1`` of the run state are processed; each index is
    claimed by exactly one worker and written back at the same index.
    """

    def __init__(self, client: ExtractionClient, max_concurrent: int):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self._client = client
        self._max_concurrent = max_concurrent

    def run(self, state: BatchRunState, task_count: int, cancellation: CancellationToken) -> None:
        """Process ``task_count`` tasks and return once every worker has exited."""
        if task_count <= 0:
            return

        cursor_lock = threading.Lock()
        cursor = 0

        def claim_next() -> Optional[int]:
            nonlocal cursor
            with cursor_lock:
                if cancellation.is_cancelled or cursor >= task_count:
                    return None
                index = cursor
                cursor += 1
                return index

        def worker() -> None:
            while True:
                index = claim_next()
                if index is None:
                    return
                task = state.mark_processing(index)
                outcome = self._extract(task.document_id, task.doc_type_code, cancellation)
                finished = state.record_outcome(index, outcome, cancelled=cancellation.is_cancelled)
                logger.debug(
                    "OCR task finished",
                    extra={"document_id": finished.document_id, "status": finished.status},
                )

        width = min(self._max_concurrent, task_count)
        with ThreadPoolExecutor(max_workers=width, thread_name_prefix="batch-ocr-worker") as executor:
            futures = [executor.submit(worker) for _ in range(width)]
        for future in futures:
            future.result()

    def _extract(
        self,
        document_id: str,
        doc_type_code: Optional[str],
        cancellation: CancellationToken,
    ) -> ExtractionOutcome:
        try:
            return self._client.extract(document_id, doc_type_code, cancellation)
        except Exception as exc:  # noqa: BLE001 - a failing document never aborts the batch
            logger.exception("Unexpected OCR failure for document %s", document_id)
            return ExtractionFailed(reason=str(exc) or type(exc).__name__)
