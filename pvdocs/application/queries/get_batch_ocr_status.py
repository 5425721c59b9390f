"""
GetBatchOcrStatus Query - Retrieves the live state of the batch OCR run.

Reads a consistent snapshot without modifying state.
"""
from dataclasses import dataclass

from pvdocs.application.dto.batch_dto import BatchStatusDTO
from pvdocs.application.runner.controller import BatchOcrController


@dataclass(frozen=True)
class GetBatchOcrStatusQuery:
    """Query for the current batch state."""


class GetBatchOcrStatusHandler:
    """Handles GetBatchOcrStatus queries."""

    def __init__(self, controller: BatchOcrController):
        self._controller = controller

    def handle(self, query: GetBatchOcrStatusQuery) -> BatchStatusDTO:
        return BatchStatusDTO.from_snapshot(self._controller.snapshot())
