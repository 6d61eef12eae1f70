from typing import Optional
import aiohttp
from ..errors import (
    ContentTooLong,
    EmptyContent,
    IdentityMissing,
    PublisherError,
    PublishFailed,
)
from ..models.post_models import MAX_COMMENTARY_LENGTH, Identity, PostRequest, PublishResult
from ..platforms.linkedin import LinkedInAPI
from ..utils.logger import LoggerCapability, NoOpLogger

CREATED = 201

class PostPublisher:
    """
    Publishes text posts to the member feed.

    Each ``publish`` call makes at most one request and is not idempotent:
    calling it twice with the same text creates two posts.
    """

    def __init__(
        self,
        credential: str,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[LoggerCapability] = None
    ):
        self.logger = logger or NoOpLogger()
        self.api = LinkedInAPI(
            credential,
            base_url=base_url,
            api_version=api_version,
            session=session,
            logger=self.logger
        )

    def build_request(self, identity: Optional[Identity], text: str) -> PostRequest:
        """
        Validate the inputs and build the post payload.

        Raises:
            IdentityMissing: no resolved identity
            EmptyContent: text is blank
            ContentTooLong: text exceeds the commentary limit
        """
        if identity is None:
            raise IdentityMissing()
        if not text or not text.strip():
            raise EmptyContent()
        if len(text) > MAX_COMMENTARY_LENGTH:
            raise ContentTooLong()
        return PostRequest.for_identity(identity, text)

    async def publish(self, identity: Optional[Identity], text: str) -> PublishResult:
        """
        Publish ``text`` as ``identity``.

        Returns:
            PublishResult; never raises for API, transport or input problems
        """
        try:
            post = self.build_request(identity, text)
            response = await self.api.create_post(post)
            if response.status != CREATED:
                raise PublishFailed(response.status)
        except PublisherError as e:
            self.logger.error("Failed to post to LinkedIn", error=e, reason=e.reason.value)
            return e.to_result()

        post_id = response.headers.get("x-restli-id")
        self.logger.info("LinkedIn post created successfully", post_id=post_id)
        return PublishResult.ok(status=response.status, post_id=post_id)
