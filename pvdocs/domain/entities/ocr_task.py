"""
OcrTask Entity - one unit of batch OCR work per document.

Tasks are immutable; every state change returns a new task. The tagged
``result`` decides which of the optional fields (error, dates, existing data,
candidates) can be present for the current state.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from pvdocs.constants import MESSAGE_CANCELLED, UNTITLED_DOCUMENT
from pvdocs.domain.entities.candidate_document import CandidateDocument
from pvdocs.domain.exceptions import InvalidTaskTransitionError
from pvdocs.domain.value_objects.extracted_dates import (
    DateCandidate,
    ExistingExtraction,
    ExtractedDates,
)
from pvdocs.domain.value_objects.extraction_outcome import (
    AlreadyProcessed,
    ExtractionCancelled,
    ExtractionFailed,
    ExtractionOutcome,
    ExtractionSucceeded,
    NeedsReview,
    TaskResult,
)
from pvdocs.domain.value_objects.task_status import TaskState


@dataclass(frozen=True)
class OcrTask:
    """Batch OCR task for a single document."""

    document_id: str
    document_title: str
    project_code: str
    project_id: Optional[str] = None
    doc_type_code: Optional[str] = None
    state: TaskState = TaskState.PENDING
    result: Optional[TaskResult] = None

    @classmethod
    def pending_for(cls, document: CandidateDocument) -> "OcrTask":
        """Create a task that still needs OCR."""
        return cls(
            document_id=document.id,
            document_title=document.title or UNTITLED_DOCUMENT,
            project_code=document.project_code,
            project_id=document.project_id,
            doc_type_code=document.doc_type_code,
        )

    @classmethod
    def already_processed_for(cls, document: CandidateDocument) -> "OcrTask":
        """Create a terminal task for a document that already carries extracted data."""
        return replace(
            cls.pending_for(document),
            state=TaskState.ALREADY_PROCESSED,
            result=AlreadyProcessed(existing=document.existing_extraction()),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _transition(self, new_state: TaskState, result: Optional[TaskResult]) -> "OcrTask":
        if not self.state.can_transition_to(new_state):
            raise InvalidTaskTransitionError(self.document_id, self.state.value, new_state.value)
        return replace(self, state=new_state, result=result)

    def mark_processing(self) -> "OcrTask":
        return self._transition(TaskState.PROCESSING, None)

    def mark_succeeded(self, outcome: ExtractionSucceeded) -> "OcrTask":
        return self._transition(TaskState.SUCCESS, outcome)

    def mark_failed(self, reason: str) -> "OcrTask":
        return self._transition(TaskState.ERROR, ExtractionFailed(reason=reason))

    def mark_cancelled(self, reason: str = MESSAGE_CANCELLED) -> "OcrTask":
        return self._transition(TaskState.SKIPPED, ExtractionCancelled(reason=reason))

    def apply_outcome(self, outcome: ExtractionOutcome) -> "OcrTask":
        """Move a processing task to the terminal state matching ``outcome``."""
        if isinstance(outcome, ExtractionSucceeded):
            return self.mark_succeeded(outcome)
        if isinstance(outcome, ExtractionCancelled):
            return self.mark_cancelled(outcome.reason)
        return self.mark_failed(outcome.reason)

    # ------------------------------------------------------------------
    # Flat read-only view
    # ------------------------------------------------------------------
    @property
    def status(self) -> str:
        return self.state.value

    @property
    def error(self) -> Optional[str]:
        if isinstance(self.result, (ExtractionFailed, ExtractionCancelled)):
            return self.result.reason
        return None

    @property
    def extracted_dates(self) -> Optional[ExtractedDates]:
        if isinstance(self.result, ExtractionSucceeded):
            return self.result.dates
        return None

    @property
    def extracted_pv_id(self) -> Optional[str]:
        if isinstance(self.result, ExtractionSucceeded):
            return self.result.pv_id
        return None

    @property
    def already_processed(self) -> bool:
        return self.state == TaskState.ALREADY_PROCESSED

    @property
    def existing_data(self) -> Optional[ExistingExtraction]:
        if isinstance(self.result, AlreadyProcessed):
            return self.result.existing
        return None

    @property
    def candidates(self) -> Optional[Tuple[DateCandidate, ...]]:
        if isinstance(self.result, NeedsReview):
            return self.result.candidates
        return None

    def is_terminal(self) -> bool:
        return self.state.is_terminal()

    def to_dict(self) -> dict:
        dates = self.extracted_dates
        existing = self.existing_data
        candidates = self.candidates
        return {
            "documentId": self.document_id,
            "documentTitle": self.document_title,
            "projectCode": self.project_code,
            "projectId": self.project_id,
            "docTypeCode": self.doc_type_code,
            "status": self.status,
            "error": self.error,
            "extractedDates": dates.to_dict() if dates is not None else None,
            "extractedPvId": self.extracted_pv_id,
            "alreadyProcessed": self.already_processed,
            "existingData": existing.to_dict() if existing is not None else None,
            "candidates": [c.to_dict() for c in candidates] if candidates is not None else None,
        }
