from __future__ import annotations

# Single source of truth for static constants and user-facing messages.

# HTTP statuses treated as transient server faults and retried.
TRANSIENT_STATUS_CODES = frozenset({502, 503, 504})

# Exponential backoff base: wait BACKOFF_BASE_SECONDS ** attempt after a failed attempt.
BACKOFF_BASE_SECONDS = 2

DEFAULT_MAX_CONCURRENT = 3
DEFAULT_MAX_BATCH_SIZE = 50
DEFAULT_MAX_PAGES = 1
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_REQUEST_TIMEOUT = 60.0

# Date candidate types returned by the OCR service.
DATE_TYPE_SUBMISSION = "submission"
DATE_TYPE_ISSUE = "issue"
DATE_TYPE_METER = "meter_date"
DATE_TYPE_UNKNOWN = "unknown"

MESSAGE_NOT_AUTHENTICATED = "not authenticated"
MESSAGE_CANCELLED = "cancelled"
MESSAGE_RETRY_LIMIT = "retry limit reached"
MESSAGE_NO_ELIGIBLE_DOCUMENTS = "no eligible documents (a cloud file is required)"
UNTITLED_DOCUMENT = "Untitled"
