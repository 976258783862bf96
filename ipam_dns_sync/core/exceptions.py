"""
Exception hierarchy for IPAM DNS Sync.

Planning errors (bad addresses, unsupported families) are raised before any
DNS API call is made. Execution errors carry enough context to tell which
step of a plan failed.
"""

from typing import List, Optional


class DNSSyncError(Exception):
    """Root exception for all IPAM DNS Sync errors."""


class ConfigurationError(DNSSyncError):
    """Configuration is missing or invalid."""


class InvalidAddressError(DNSSyncError, ValueError):
    """Address is absent or not a valid IPv4/IPv6 prefix."""


class UnsupportedFamilyError(DNSSyncError):
    """Address is neither IPv4 nor IPv6."""


class WebhookParseError(DNSSyncError):
    """Webhook payload could not be decoded."""


class UnknownEventError(WebhookParseError):
    """Webhook event kind is not created, updated or deleted."""


class SignatureError(DNSSyncError):
    """Webhook signature does not match the request body."""


class ApiError(DNSSyncError):
    """A DNS management API call failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PlanExecutionError(DNSSyncError):
    """A plan step failed; later steps were not attempted.

    Steps applied before the failure are not rolled back.
    """

    def __init__(self, step: int, operation, applied: List, cause: Exception):
        super().__init__(
            f"Step {step + 1} ({operation.describe()}) failed: {cause}"
        )
        self.step = step
        self.operation = operation
        self.applied = list(applied)
        self.cause = cause
