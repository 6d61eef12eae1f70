from typing import Optional, Tuple
import aiohttp
from pydantic import ValidationError
from ..errors import TransportError
from ..models.post_models import FailureReason, Identity, ValidationOutcome
from ..platforms.linkedin import LinkedInAPI
from ..utils.logger import LoggerCapability, NoOpLogger

class IdentityResolver:
    """
    Maps an access token to the member's person URN.

    The resolver keeps no state of its own: a cached identity is handed in by
    the caller, and persisting a freshly resolved one is the caller's job.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[LoggerCapability] = None
    ):
        self.base_url = base_url
        self.api_version = api_version
        self.session = session
        self.logger = logger or NoOpLogger()

    def _api(self, credential: str) -> LinkedInAPI:
        return LinkedInAPI(
            credential,
            base_url=self.base_url,
            api_version=self.api_version,
            session=self.session,
            logger=self.logger
        )

    async def check(self, credential: str) -> ValidationOutcome:
        """
        Call user-info and describe the outcome.

        Returns:
            ValidationOutcome with the identity on success, otherwise a reason of
            VALIDATION_FAILED (rejected token or malformed body) or
            TRANSPORT_ERROR (LinkedIn could not be reached)
        """
        try:
            response = await self._api(credential).get_user_info()
        except TransportError as e:
            self.logger.warn("Token validation could not reach LinkedIn", error=e.message)
            return ValidationOutcome(
                is_valid=False,
                reason=FailureReason.TRANSPORT_ERROR,
                message=e.message
            )

        if response.status != 200:
            self.logger.warn("Token rejected by LinkedIn", status=response.status)
            return ValidationOutcome(
                is_valid=False,
                reason=FailureReason.VALIDATION_FAILED,
                status=response.status,
                message="token invalid or expired"
            )

        subject = response.body.get("sub") if isinstance(response.body, dict) else None
        if not isinstance(subject, str):
            self.logger.warn("User info response has no subject id")
            return ValidationOutcome(
                is_valid=False,
                reason=FailureReason.VALIDATION_FAILED,
                status=response.status,
                message="malformed user info response"
            )

        try:
            identity = Identity.parse(subject)
        except ValidationError:
            self.logger.warn("User info response has an empty subject id")
            return ValidationOutcome(
                is_valid=False,
                reason=FailureReason.VALIDATION_FAILED,
                status=response.status,
                message="malformed user info response"
            )

        self.logger.info("LinkedIn token validated", person_urn=identity.urn)
        return ValidationOutcome(is_valid=True, identity=identity, status=response.status)

    async def validate(self, credential: str) -> Tuple[bool, Optional[Identity]]:
        """Return ``(True, identity)`` for a usable token, ``(False, None)`` otherwise."""
        outcome = await self.check(credential)
        return outcome.is_valid, outcome.identity

    async def resolve(self, credential: str, cached_identity: Optional[Identity] = None) -> Optional[Identity]:
        """
        Return the cached identity untouched, or look it up.

        A cached identity is trusted as-is: it is neither expired nor re-checked.
        """
        if cached_identity is not None:
            self.logger.debug("Using cached person URN", person_urn=cached_identity.urn)
            return cached_identity

        is_valid, identity = await self.validate(credential)
        return identity if is_valid else None
