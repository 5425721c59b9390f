"""
Domain services for business logic that doesn't belong to a specific entity.

- BatchClassifier: splits candidate documents into a batch OCR plan
- DateExtractor: finds and tags dates in OCR'd document text
"""
from .batch_classifier import BatchClassifier, BatchPlan
from .date_extractor import DateExtractor

__all__ = ["BatchClassifier", "BatchPlan", "DateExtractor"]
