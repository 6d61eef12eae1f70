from typing import Optional
from .models.post_models import FailureReason, MAX_COMMENTARY_LENGTH, PublishResult

class PublisherError(Exception):
    """Base class for every failure the publisher reports to its caller."""

    reason: FailureReason
    default_message = "LinkedIn request failed"
    # Expected outcomes are logged without a traceback
    expected = True

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.message = message or self.default_message
        self.status = status
        super().__init__(self.message)

    def to_result(self) -> PublishResult:
        return PublishResult.failed(self.reason, status=self.status, message=self.message)


class CredentialMissing(PublisherError):
    reason = FailureReason.CREDENTIAL_MISSING
    default_message = "No LinkedIn access token configured"


class ValidationFailed(PublisherError):
    reason = FailureReason.VALIDATION_FAILED
    default_message = "LinkedIn token is invalid or expired"


class IdentityMissing(PublisherError):
    reason = FailureReason.IDENTITY_MISSING
    default_message = "Person URN not available. Please validate token first."


class EmptyContent(PublisherError):
    reason = FailureReason.EMPTY_CONTENT
    default_message = "Please enter some content for your post"


class ContentTooLong(PublisherError):
    reason = FailureReason.CONTENT_TOO_LONG
    default_message = f"Post exceeds {MAX_COMMENTARY_LENGTH} characters"


class PublishFailed(PublisherError):
    reason = FailureReason.PUBLISH_FAILED
    default_message = "unexpected status"

    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message, status=status)

    def __str__(self) -> str:
        return f"{self.message}: {self.status}"


class TransportError(PublisherError):
    reason = FailureReason.TRANSPORT_ERROR
    default_message = "Network error while contacting LinkedIn"
    expected = False
