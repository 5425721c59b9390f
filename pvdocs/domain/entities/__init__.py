"""Domain entities package"""

from .batch_progress import BatchProgress
from .candidate_document import CandidateDocument
from .ocr_task import OcrTask

__all__ = ["BatchProgress", "CandidateDocument", "OcrTask"]
