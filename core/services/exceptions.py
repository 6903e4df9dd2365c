"""
Service-layer exceptions for consistent error handling across the report service.

Expected domain outcomes (unknown report type, failed document in a batch)
are returned as structured results. These exceptions cover the conditions
that must reach the HTTP boundary as faults or as a cancellation.
"""


class ServiceError(Exception):
    """Base exception for all service-related errors."""
    pass


class ServiceNotConfigured(ServiceError):
    """
    Raised when a service setting is missing or has an invalid value.

    Example:
        REPORT_EXPORT_MAX_CONCURRENCY set to 0.
    """
    pass


class ReportPayloadError(ServiceError):
    """
    Raised when the base64 payload of a single export cannot be decoded.

    Unlike other caller-input problems this surfaces as a fault (HTTP 500),
    which legacy callers of the single export endpoint rely on.
    """
    pass


class ExportCancelled(ServiceError):
    """
    Raised when an export observes its cancellation signal.

    Mapped to HTTP 499 at the API boundary, never reported as a failed document.
    """
    pass
