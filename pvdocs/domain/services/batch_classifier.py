"""
BatchClassifier domain service.

Decides which candidate documents a batch OCR run admits and in which order:
documents that still need OCR first, documents that already carry extracted
data second, both under one combined batch size cap.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from pvdocs.domain.entities.batch_progress import BatchProgress
from pvdocs.domain.entities.candidate_document import CandidateDocument
from pvdocs.domain.entities.ocr_task import OcrTask
from pvdocs.domain.exceptions import DomainValidationError


@dataclass(frozen=True)
class BatchPlan:
    """
    Immutable result of classifying one batch.

    Attributes:
        to_process: Admitted documents that need OCR, in input order
        already_processed: Admitted documents that already have data, in input order
        eligible_count: Documents that had a cloud file, before the cap
    """
    to_process: Tuple[CandidateDocument, ...] = ()
    already_processed: Tuple[CandidateDocument, ...] = ()
    eligible_count: int = 0
    tasks: Tuple[OcrTask, ...] = field(init=False)
    initial_progress: BatchProgress = field(init=False)

    def __post_init__(self):
        tasks = tuple(OcrTask.pending_for(doc) for doc in self.to_process) + tuple(
            OcrTask.already_processed_for(doc) for doc in self.already_processed
        )
        object.__setattr__(self, "tasks", tasks)
        object.__setattr__(
            self,
            "initial_progress",
            BatchProgress.for_batch(len(self.to_process), len(self.already_processed)),
        )

    @property
    def is_empty(self) -> bool:
        """True when no document was eligible, so no run should start."""
        return self.eligible_count == 0


class BatchClassifier:
    """Classifies candidate documents into a :class:`BatchPlan`."""

    def __init__(self, max_batch_size: int):
        if max_batch_size < 1:
            raise DomainValidationError("max_batch_size must be >= 1")
        self._max_batch_size = max_batch_size

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    def classify(
        self,
        documents: Iterable[CandidateDocument],
        force_reprocess_all: bool = False,
    ) -> BatchPlan:
        """
        Build the batch plan for ``documents``.

        Documents without a cloud file are dropped. With
        ``force_reprocess_all`` every eligible document needs processing;
        otherwise a document with a submitted date, issued date or extracted
        identifier counts as already processed.

        Raises:
            DomainValidationError: If an entry is not a CandidateDocument
        """
        needs_processing: List[CandidateDocument] = []
        already_processed: List[CandidateDocument] = []
        eligible = 0

        for document in documents:
            if not isinstance(document, CandidateDocument):
                raise DomainValidationError(
                    f"Expected CandidateDocument, got {type(document).__name__}"
                )
            if not document.has_drive_file:
                continue
            eligible += 1
            if not force_reprocess_all and document.has_extracted_data:
                already_processed.append(document)
            else:
                needs_processing.append(document)

        admitted = needs_processing[: self._max_batch_size]
        remaining = self._max_batch_size - len(admitted)
        admitted_processed = already_processed[:remaining] if remaining > 0 else []

        return BatchPlan(
            to_process=tuple(admitted),
            already_processed=tuple(admitted_processed),
            eligible_count=eligible,
        )
