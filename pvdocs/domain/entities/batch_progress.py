"""BatchProgress Entity - aggregate counters for one batch OCR run."""
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class BatchProgress:
    """
    Counters scoped to a single run.

    ``total`` counts tasks that need active processing. ``skipped`` counts
    documents that already had extracted data when the batch was built; it is
    not incremented by workers. ``review`` is reserved and stays zero.
    """

    total: int = 0
    completed: int = 0
    success: int = 0
    error: int = 0
    skipped: int = 0
    review: int = 0

    @classmethod
    def empty(cls) -> "BatchProgress":
        return cls()

    @classmethod
    def for_batch(cls, to_process: int, already_processed: int) -> "BatchProgress":
        return cls(total=to_process, skipped=already_processed)

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.completed / self.total * 100)

    @property
    def is_complete(self) -> bool:
        return self.completed >= self.total

    def record_success(self) -> "BatchProgress":
        return replace(self, completed=self.completed + 1, success=self.success + 1)

    def record_error(self) -> "BatchProgress":
        return replace(self, completed=self.completed + 1, error=self.error + 1)

    def record_cancelled(self) -> "BatchProgress":
        return replace(self, completed=self.completed + 1)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "success": self.success,
            "error": self.error,
            "skipped": self.skipped,
            "review": self.review,
            "percent": self.percent,
        }
