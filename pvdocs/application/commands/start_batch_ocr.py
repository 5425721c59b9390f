"""StartBatchOcr Command - admits candidate documents and launches a batch OCR run.

Once the run is claimed, the handler installs the caller's bearer token (or
the configured service token when the caller sent none) in the session store
read by the OCR client, then returns while the run continues in the background.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from pvdocs.application.dto.batch_dto import BatchStartDTO
from pvdocs.application.runner.controller import BatchOcrController
from pvdocs.domain.entities.candidate_document import CandidateDocument
from pvdocs.infrastructure.auth.session_provider import SessionStore


@dataclass(frozen=True)
class StartBatchOcrCommand:
    documents: Tuple[CandidateDocument, ...]
    force_reprocess_all: Optional[bool] = None
    access_token: Optional[str] = None


class StartBatchOcrHandler:
    """Handles StartBatchOcr commands."""

    def __init__(
        self,
        controller: BatchOcrController,
        session_store: Optional[SessionStore] = None,
        default_access_token: Optional[str] = None,
    ):
        self._controller = controller
        self._sessions = session_store
        self._default_access_token = default_access_token or None

    def handle(self, command: StartBatchOcrCommand) -> BatchStartDTO:
        """
        Raises:
            BatchRunActiveError: If a run is already active
            DomainValidationError: If the document list is malformed
        """
        result = self._controller.launch(
            command.documents,
            force_reprocess_all=command.force_reprocess_all,
            on_begin=lambda: self._install_token(command.access_token),
        )
        return BatchStartDTO.from_result(result)

    def _install_token(self, access_token: Optional[str]) -> None:
        # Only reached by the call that owns the run; a rejected start leaves the running batch's token alone.
        if self._sessions is not None:
            self._sessions.set_access_token(access_token or self._default_access_token)
