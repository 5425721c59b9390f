"""CancelBatchOcr Command - asks the active run to stop."""
from dataclasses import dataclass
from typing import Any, Dict

from pvdocs.application.runner.controller import BatchOcrController


@dataclass(frozen=True)
class CancelBatchOcrCommand:
    pass


class CancelBatchOcrHandler:
    """Handles CancelBatchOcr commands."""

    def __init__(self, controller: BatchOcrController):
        self._controller = controller

    def handle(self, command: CancelBatchOcrCommand) -> Dict[str, Any]:
        return {"cancelled": self._controller.cancel()}
