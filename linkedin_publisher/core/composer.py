from enum import Enum
from typing import Callable, Optional
from ..models.post_models import MAX_COMMENTARY_LENGTH, FailureReason, Identity, PublishResult
from ..utils.logger import LoggerCapability, NoOpLogger
from .publisher import PostPublisher

Notifier = Callable[[str], None]

class ComposerState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    PUBLISHED = "published"
    FAILED = "failed"


class PostComposer:
    """
    Headless post composer: owns the text buffer and one publish interaction.

    States run ``IDLE -> SUBMITTING -> PUBLISHED | FAILED``. Submitting is
    refused while a request is in flight. ``FAILED`` accepts another submit,
    which starts a fresh cycle. ``PUBLISHED`` closes the composer.
    """

    def __init__(
        self,
        publisher: PostPublisher,
        identity: Optional[Identity],
        notify: Notifier,
        logger: Optional[LoggerCapability] = None
    ):
        self.publisher = publisher
        self.identity = identity
        self.notify = notify
        self.logger = logger or NoOpLogger()
        self.content = ""
        self.state = ComposerState.IDLE
        self.closed = False
        self.last_result: Optional[PublishResult] = None

    @property
    def character_count(self) -> str:
        return f"{len(self.content)}/{MAX_COMMENTARY_LENGTH} characters"

    @property
    def can_submit(self) -> bool:
        return not self.closed and self.state != ComposerState.SUBMITTING

    @property
    def submit_label(self) -> str:
        return "Posting..." if self.state == ComposerState.SUBMITTING else "Post to LinkedIn"

    def set_content(self, text: str) -> None:
        self.content = text

    def close(self) -> None:
        self.closed = True

    def _notify(self, message: str) -> None:
        # A dismissed composer finishes its request silently
        if not self.closed:
            self.notify(message)

    async def submit(self) -> Optional[PublishResult]:
        """
        Publish the current buffer.

        Returns:
            The PublishResult, or None when the submit was refused because a
            request is already in flight or the composer is closed
        """
        if not self.can_submit:
            self.logger.debug("Submit ignored", state=self.state.value, closed=self.closed)
            return None

        if not self.content.strip():
            self._notify("Please enter some content for your post")
            return PublishResult.failed(FailureReason.EMPTY_CONTENT)

        self.state = ComposerState.SUBMITTING
        self.logger.debug("Posting to LinkedIn", content_length=len(self.content))
        try:
            result = await self.publisher.publish(self.identity, self.content)
        except Exception as e:
            self.logger.error("Unexpected error while posting to LinkedIn", error=e)
            result = PublishResult.failed(FailureReason.TRANSPORT_ERROR, message=str(e) or e.__class__.__name__)
        self.last_result = result

        if result.success:
            self.state = ComposerState.PUBLISHED
            self._notify("Post published to LinkedIn successfully!")
            self.close()
        else:
            self.state = ComposerState.FAILED
            self._notify(f"Failed to post to LinkedIn: {describe_failure(result)}")
        return result


def describe_failure(result: PublishResult) -> str:
    """Single-line, user-facing explanation of a failed publish."""
    if result.reason == FailureReason.PUBLISH_FAILED:
        return f"Failed to post: {result.status}"
    if result.reason == FailureReason.IDENTITY_MISSING:
        return "LinkedIn account is not linked, validate your token and try again"
    return result.message or (result.reason.value if result.reason else "unknown error")
