"""Domain exceptions."""


class DomainException(Exception):
    """Base exception for domain layer errors."""
    pass


class DomainValidationError(DomainException):
    """Exception raised when validation fails at the domain boundary."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidTaskTransitionError(DomainException):
    """Exception raised when a task is moved to a state its current state cannot reach."""

    def __init__(self, document_id: str, current: str, requested: str):
        super().__init__(
            f"Invalid task transition for document {document_id}: {current} -> {requested}"
        )
        self.document_id = document_id
        self.current = current
        self.requested = requested


class BatchRunActiveError(DomainException):
    """Exception raised when an operation needs an idle controller but a batch is running."""

    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation} while a batch OCR run is active")
        self.operation = operation
