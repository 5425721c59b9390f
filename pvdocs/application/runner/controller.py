"""
BatchOcrController - public entry points of a batch OCR run.

One controller owns one run state; only one run may be active at a time.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple

from pvdocs.constants import MESSAGE_NO_ELIGIBLE_DOCUMENTS
from pvdocs.domain.entities.candidate_document import CandidateDocument
from pvdocs.domain.entities.batch_progress import BatchProgress
from pvdocs.domain.entities.ocr_task import OcrTask
from pvdocs.domain.exceptions import BatchRunActiveError
from pvdocs.domain.services.batch_classifier import BatchClassifier, BatchPlan
from pvdocs.domain.value_objects.batch_options import BatchOcrOptions

from .cancellation import CancellationToken
from .pool import ExtractionClient, WorkerPool
from .state import BatchOcrSnapshot, BatchRunState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchStartResult:
    """Summary returned when a batch is started (or refused for lack of work)."""

    started: bool
    processed: int = 0
    already_processed: int = 0
    message: Optional[str] = None
    future: Optional[Future] = field(default=None, compare=False, repr=False)

    @classmethod
    def not_started(cls, message: str = MESSAGE_NO_ELIGIBLE_DOCUMENTS) -> "BatchStartResult":
        return cls(started=False, message=message)


class BatchOcrController:
    """Runs batch OCR: classify, drive the worker pool, expose live state."""

    def __init__(
        self,
        client: ExtractionClient,
        options: Optional[BatchOcrOptions] = None,
        *,
        executor: Optional[Executor] = None,
    ):
        self._options = options or BatchOcrOptions()
        self._classifier = BatchClassifier(self._options.max_batch_size)
        self._pool = WorkerPool(client, self._options.max_concurrent)
        self._state = BatchRunState()
        self._executor = executor
        self._owns_executor = executor is None
        self._cancellation: Optional[CancellationToken] = None
        # Guards claiming a run together with installing its cancellation token.
        self._lifecycle_lock = threading.Lock()

    @property
    def options(self) -> BatchOcrOptions:
        return self._options

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def tasks(self) -> Tuple[OcrTask, ...]:
        return self._state.snapshot().tasks

    @property
    def progress(self) -> BatchProgress:
        return self._state.snapshot().progress

    def snapshot(self) -> BatchOcrSnapshot:
        return self._state.snapshot()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        documents: Iterable[CandidateDocument],
        force_reprocess_all: Optional[bool] = None,
        *,
        on_begin: Optional[Callable[[], None]] = None,
    ) -> BatchStartResult:
        """
        Classify ``documents`` and process them, blocking until the run settles.

        ``on_begin`` runs once this call owns the run and before any task is
        claimed; a call rejected as concurrent never reaches it.

        Raises:
            BatchRunActiveError: If another run is active on this controller
            DomainValidationError: If an entry is not a CandidateDocument
        """
        prepared = self._prepare(documents, force_reprocess_all, on_begin)
        if prepared is None:
            return BatchStartResult.not_started()
        plan, cancellation = prepared
        self._run(plan, cancellation)
        return self._summary(plan)

    def launch(
        self,
        documents: Iterable[CandidateDocument],
        force_reprocess_all: Optional[bool] = None,
        *,
        on_begin: Optional[Callable[[], None]] = None,
    ) -> BatchStartResult:
        """Like :meth:`start`, but processing continues on a background thread."""
        prepared = self._prepare(documents, force_reprocess_all, on_begin)
        if prepared is None:
            return BatchStartResult.not_started()
        plan, cancellation = prepared
        try:
            future = self._background_executor().submit(self._run, plan, cancellation)
        except Exception:
            self._state.finish()
            raise
        summary = self._summary(plan)
        return BatchStartResult(
            started=summary.started,
            processed=summary.processed,
            already_processed=summary.already_processed,
            future=future,
        )

    def cancel(self) -> bool:
        """Signal the active run to stop. Returns False when nothing is running."""
        with self._lifecycle_lock:
            cancellation = self._cancellation
            running = self._state.is_running
        if cancellation is None or not running:
            return False
        fired = cancellation.cancel()
        if fired:
            logger.info("Batch OCR cancellation requested")
        return fired

    def reset(self) -> None:
        """
        Clear tasks and progress.

        Raises:
            BatchRunActiveError: If a run is active
        """
        self._state.reset()

    def close(self) -> None:
        """Shut down the background executor created by this controller."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _prepare(
        self,
        documents: Iterable[CandidateDocument],
        force_reprocess_all: Optional[bool],
        on_begin: Optional[Callable[[], None]] = None,
    ) -> Optional[Tuple[BatchPlan, CancellationToken]]:
        if self._state.is_running:
            raise BatchRunActiveError("start a batch")

        force = self._options.force_reprocess if force_reprocess_all is None else force_reprocess_all
        plan = self._classifier.classify(documents, force_reprocess_all=force)
        if plan.is_empty:
            logger.info("Batch OCR not started: no document has a cloud file")
            return None

        cancellation = CancellationToken()
        with self._lifecycle_lock:
            self._state.begin(plan.tasks, plan.initial_progress)
            self._cancellation = cancellation
        if on_begin is not None:
            try:
                on_begin()
            except Exception:
                self._state.finish()
                raise
        logger.info(
            "Batch OCR started",
            extra={
                "to_process": len(plan.to_process),
                "already_processed": len(plan.already_processed),
                "force_reprocess": force,
            },
        )
        return plan, cancellation

    def _run(self, plan: BatchPlan, cancellation: CancellationToken) -> None:
        try:
            self._pool.run(self._state, len(plan.to_process), cancellation)
            if cancellation.is_cancelled:
                skipped = self._state.cancel_pending()
                logger.info("Batch OCR cancelled", extra={"unclaimed_tasks": skipped})
        finally:
            self._state.finish()
            progress = self._state.snapshot().progress
            logger.info(
                "Batch OCR finished",
                extra={
                    "total": progress.total,
                    "completed": progress.completed,
                    "success": progress.success,
                    "error": progress.error,
                },
            )

    def _background_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="batch-ocr-run")
        return self._executor

    @staticmethod
    def _summary(plan: BatchPlan) -> BatchStartResult:
        return BatchStartResult(
            started=True,
            processed=len(plan.to_process),
            already_processed=len(plan.already_processed),
        )
