"""ResetBatchOcr Command - clears the finished run's tasks and counters."""
from dataclasses import dataclass

from pvdocs.application.runner.controller import BatchOcrController


@dataclass(frozen=True)
class ResetBatchOcrCommand:
    pass


class ResetBatchOcrHandler:
    """Handles ResetBatchOcr commands."""

    def __init__(self, controller: BatchOcrController):
        self._controller = controller

    def handle(self, command: ResetBatchOcrCommand) -> None:
        """
        Raises:
            BatchRunActiveError: If a run is active
        """
        self._controller.reset()
