from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from ..utils.logger import LogLevel

PERSON_URN_PREFIX = "urn:li:person:"
MAX_COMMENTARY_LENGTH = 3000
DEFAULT_OAUTH_URL = "https://www.linkedin.com/oauth/v2/authorization"

class Visibility(str, Enum):
    PUBLIC = "PUBLIC"
    CONNECTIONS = "CONNECTIONS"
    LOGGED_IN = "LOGGED_IN"

class LifecycleState(str, Enum):
    PUBLISHED = "PUBLISHED"
    DRAFT = "DRAFT"

class FeedDistribution(str, Enum):
    MAIN_FEED = "MAIN_FEED"
    NONE = "NONE"

class FailureReason(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    VALIDATION_FAILED = "validation_failed"
    IDENTITY_MISSING = "identity_missing"
    EMPTY_CONTENT = "empty_content"
    CONTENT_TOO_LONG = "content_too_long"
    PUBLISH_FAILED = "publish_failed"
    TRANSPORT_ERROR = "transport_error"

class Identity(BaseModel):
    """Resolved LinkedIn member, identified by the ``sub`` claim of user-info."""
    model_config = ConfigDict(frozen=True)

    subject_id: str

    @field_validator("subject_id")
    @classmethod
    def _normalize_subject(cls, value: str) -> str:
        value = value.strip()
        if value.startswith(PERSON_URN_PREFIX):
            value = value[len(PERSON_URN_PREFIX):]
        if not value:
            raise ValueError("subject id must not be empty")
        return value

    @property
    def urn(self) -> str:
        return f"{PERSON_URN_PREFIX}{self.subject_id}"

    @classmethod
    def parse(cls, value: str) -> "Identity":
        """Build an identity from either a raw subject id or a person URN."""
        return cls(subject_id=value)

    def __str__(self) -> str:
        return self.urn

class Distribution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feed_distribution: FeedDistribution = Field(FeedDistribution.MAIN_FEED, alias="feedDistribution")
    target_entities: List[str] = Field(default_factory=list, alias="targetEntities")
    third_party_distribution_channels: List[str] = Field(
        default_factory=list, alias="thirdPartyDistributionChannels"
    )

class PostRequest(BaseModel):
    """Payload for ``POST /posts``."""
    model_config = ConfigDict(populate_by_name=True)

    author: str
    lifecycle_state: LifecycleState = Field(LifecycleState.PUBLISHED, alias="lifecycleState")
    visibility: Visibility = Visibility.PUBLIC
    commentary: str = Field(min_length=1, max_length=MAX_COMMENTARY_LENGTH)
    distribution: Distribution = Field(default_factory=Distribution)

    @classmethod
    def for_identity(cls, identity: Identity, commentary: str) -> "PostRequest":
        return cls(author=identity.urn, commentary=commentary)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

class PublishResult(BaseModel):
    """Outcome of a single publish attempt."""
    success: bool
    reason: Optional[FailureReason] = None
    status: Optional[int] = None
    message: Optional[str] = None
    post_id: Optional[str] = None

    @classmethod
    def ok(cls, status: int = 201, post_id: Optional[str] = None) -> "PublishResult":
        return cls(success=True, status=status, post_id=post_id)

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        status: Optional[int] = None,
        message: Optional[str] = None
    ) -> "PublishResult":
        return cls(success=False, reason=reason, status=status, message=message)

class ValidationOutcome(BaseModel):
    """Result of a user-info lookup, keeping rejected and unreachable apart."""
    is_valid: bool
    identity: Optional[Identity] = None
    reason: Optional[FailureReason] = None
    status: Optional[int] = None
    message: Optional[str] = None

class PluginSettings(BaseModel):
    """Settings persisted between sessions."""
    access_token: str = ""
    person_urn: str = ""
    dev_mode: bool = False
    log_level: LogLevel = LogLevel.ERROR
    oauth_url: str = DEFAULT_OAUTH_URL
