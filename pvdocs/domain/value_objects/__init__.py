"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .batch_options import BatchOcrOptions
from .extracted_dates import DateCandidate, ExistingExtraction, ExtractedDates
from .extraction_outcome import (
    AlreadyProcessed,
    ExtractionCancelled,
    ExtractionFailed,
    ExtractionOutcome,
    ExtractionSucceeded,
    NeedsReview,
    TaskResult,
)
from .task_status import TaskState

__all__ = [
    'BatchOcrOptions',
    'DateCandidate',
    'ExistingExtraction',
    'ExtractedDates',
    'AlreadyProcessed',
    'ExtractionCancelled',
    'ExtractionFailed',
    'ExtractionOutcome',
    'ExtractionSucceeded',
    'NeedsReview',
    'TaskResult',
    'TaskState',
]
