"""
Error taxonomy for the RAG service.

Every error kind declares the HTTP status it maps to and whether the
failed operation may be retried by the caller. Nothing in the service
retries on its own.
"""


class RAGError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    error: str = "Internal server error"
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "error": self.error,
            "message": self.message,
            "retryable": self.retryable,
        }


class ValidationError(RAGError):
    """The request itself is invalid (e.g. blank question)."""

    status_code = 400
    error = "Invalid request"

    def to_dict(self) -> dict:
        return {"error": self.message}


class ConfigurationError(RAGError):
    """Provider credentials or model configuration are missing."""

    error = "Service misconfigured"


class ProviderError(RAGError):
    """The generation provider answered with a non-2xx status or garbage."""

    error = "Generation provider error"

    def __init__(self, message: str, status: int | None = None, body=None):
        super().__init__(message)
        self.status = status
        self.body = body


class ProviderTransportError(ProviderError):
    """The generation provider could not be reached or timed out."""

    status_code = 504
    error = "Generation provider unavailable"
    retryable = True


class EnrichmentError(RAGError):
    """Building the enriched text for a container failed."""

    error = "Enrichment failed"

    def __init__(self, message: str, container_id: str | None = None, name: str | None = None):
        super().__init__(message)
        self.container_id = container_id
        self.name = name


class StoreError(RAGError):
    """Document store driver failure."""

    error = "Document store error"


class StoreUnavailableError(StoreError):
    """Document store unreachable or timed out."""

    status_code = 503
    error = "Document store unavailable"
    retryable = True


class PipelineBusyError(RAGError):
    """An embedding pipeline run is already in progress."""

    status_code = 409
    error = "Embedding pipeline busy"
    retryable = True
