from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import asyncio
import json
import aiohttp
from ..config import get_settings
from ..errors import TransportError
from ..models.post_models import PostRequest
from ..utils.logger import LoggerCapability, NoOpLogger

@dataclass
class ApiResponse:
    """Status, parsed JSON body (if any) and lower-cased headers of a LinkedIn response."""
    status: int
    body: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class LinkedInAPI:
    """
    Thin wrapper around the versioned LinkedIn REST endpoints.

    One instance is bound to one access token. Every request carries the bearer
    token and the ``LinkedIn-Version`` header. Network failures surface as
    ``TransportError``; HTTP statuses are returned untouched for the caller to
    interpret.
    """

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[LoggerCapability] = None
    ):
        settings = get_settings()
        self._access_token = access_token
        self.base_url = (base_url or settings.LINKEDIN_API_BASE_URL).rstrip("/")
        self.api_version = api_version or settings.LINKEDIN_API_VERSION
        self._session = session
        self.logger = logger or NoOpLogger()

    @property
    def userinfo_url(self) -> str:
        return f"{self.base_url}/userinfo"

    @property
    def posts_url(self) -> str:
        return f"{self.base_url}/posts"

    def headers(self, with_json: bool = False) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "LinkedIn-Version": self.api_version
        }
        if with_json:
            headers["Content-Type"] = "application/json"
        return headers

    async def get_user_info(self) -> ApiResponse:
        """Fetch the OpenID user-info document for the token's member."""
        self.logger.debug("Requesting LinkedIn user info", url=self.userinfo_url)
        response = await self._request("GET", self.userinfo_url, headers=self.headers())
        self.logger.debug("User info response received", status=response.status)
        return response

    async def create_post(self, post: PostRequest) -> ApiResponse:
        """Submit a post. Returns the raw response; 201 means created."""
        payload = post.to_payload()
        self.logger.debug(
            "Submitting LinkedIn post",
            url=self.posts_url,
            content_length=len(post.commentary)
        )
        response = await self._request(
            "POST",
            self.posts_url,
            headers=self.headers(with_json=True),
            data=json.dumps(payload)
        )
        self.logger.debug("Post response received", status=response.status)
        return response

    async def _request(self, method: str, url: str, **kwargs) -> ApiResponse:
        try:
            if self._session is not None:
                return await self._send(self._session, method, url, **kwargs)
            async with aiohttp.ClientSession() as session:
                return await self._send(session, method, url, **kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message = str(e) or e.__class__.__name__
            self.logger.error(f"{method} {url} failed", error=e)
            raise TransportError(message) from e
        except ValueError as e:
            # aiohttp refuses header values with control characters before sending
            self.logger.error(f"{method} {url} could not be sent", error=e)
            raise TransportError(f"Invalid request: {e}") from e

    @staticmethod
    async def _send(session: aiohttp.ClientSession, method: str, url: str, **kwargs) -> ApiResponse:
        async with session.request(method, url, **kwargs) as response:
            text = _decode(await response.read(), response.charset)
            try:
                body = json.loads(text) if text else None
            except ValueError:
                body = None
            return ApiResponse(
                status=response.status,
                body=body,
                headers={key.lower(): value for key, value in response.headers.items()},
                text=text
            )


def _decode(raw: bytes, charset: Optional[str]) -> str:
    """Decode a response body; undecodable bytes become replacement characters."""
    if not raw:
        return ""
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")
