from typing import Callable, List, Optional, Union
import aiohttp
from ..config import get_settings
from ..errors import CredentialMissing, TransportError, ValidationFailed
from ..models.post_models import FailureReason, Identity, PluginSettings, PublishResult
from ..utils.logger import LogLevel, NoOpLogger, PluginLogger, create_logger
from .composer import PostComposer
from .identity import IdentityResolver
from .publisher import PostPublisher
from .settings_store import SettingsStore

CREATE_POST_COMMAND = "create-linkedin-post"
VALIDATE_TOKEN_COMMAND = "validate-linkedin-token"

class NoticeLog:
    """Collects the transient notices shown to the user."""

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> List[str]:
        messages, self.messages = self.messages, []
        return messages


class LinkedInPlugin:
    """
    Host-facing lifecycle and commands.

    The host calls ``load()`` once and ``unload()`` on shutdown. Resolver and
    publisher are built per command; the only long-lived state is the settings
    store, which owns the cached person URN.
    """

    def __init__(
        self,
        store: SettingsStore,
        notify: Optional[Callable[[str], None]] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.store = store
        self.notify = notify or NoticeLog()
        self.base_url = base_url
        self.api_version = api_version
        self.session = session
        self.logger: Union[PluginLogger, NoOpLogger] = NoOpLogger()
        self.loaded = False
        self.last_failure: Optional[PublishResult] = None

    @property
    def settings(self) -> PluginSettings:
        return self.store.settings

    def _build_logger(self) -> None:
        self.logger = create_logger(
            get_settings().PLUGIN_NAME,
            self.settings.dev_mode,
            self.settings.log_level
        )

    def load(self) -> None:
        self.store.load()
        self._build_logger()
        self.loaded = True
        self.logger.log_plugin_load()
        self.logger.debug("Settings loaded", dev_mode=self.settings.dev_mode, log_level=self.settings.log_level.name)

    def unload(self) -> None:
        self.logger.log_plugin_unload()
        self.loaded = False

    def save_settings(self) -> None:
        self.store.save()
        # Dev mode or log level may have changed
        self._build_logger()
        self.logger.debug("Settings saved")

    def update_settings(
        self,
        access_token: Optional[str] = None,
        dev_mode: Optional[bool] = None,
        log_level: Optional[LogLevel] = None
    ) -> PluginSettings:
        if access_token is not None and self.store.set_credential(access_token):
            self.logger.log_settings_change("access_token", "***", "***")
        if dev_mode is not None and dev_mode != self.settings.dev_mode:
            self.logger.log_settings_change("dev_mode", self.settings.dev_mode, dev_mode)
            self.store.update(dev_mode=dev_mode)
            self.notify(f"Dev mode {'enabled' if dev_mode else 'disabled'}. Check the logs for details.")
        if log_level is not None and log_level != self.settings.log_level:
            self.logger.log_settings_change("log_level", self.settings.log_level.name, LogLevel(log_level).name)
            self.store.update(log_level=log_level)
        self.save_settings()
        return self.settings

    def _resolver(self) -> IdentityResolver:
        return IdentityResolver(
            base_url=self.base_url,
            api_version=self.api_version,
            session=self.session,
            logger=self.logger
        )

    def _publisher(self, credential: str) -> PostPublisher:
        return PostPublisher(
            credential,
            base_url=self.base_url,
            api_version=self.api_version,
            session=self.session,
            logger=self.logger
        )

    async def validate_token(self) -> bool:
        """Check the configured token and remember the member's URN."""
        self.logger.log_command_execution(VALIDATE_TOKEN_COMMAND)
        credential = self.store.credential
        if not credential:
            self.notify("Please enter a LinkedIn access token first")
            return False

        outcome = await self._resolver().check(credential)
        if outcome.is_valid:
            self.store.remember_identity(outcome.identity)
            self.save_settings()
            self.notify("LinkedIn token is valid!")
            return True
        if outcome.reason == FailureReason.TRANSPORT_ERROR:
            self.notify(f"Error validating token: {outcome.message}")
        else:
            self.notify("LinkedIn token is invalid or expired")
        return False

    async def _identity(self, credential: str) -> Optional[Identity]:
        cached = self.store.cached_identity
        if cached is not None:
            return await self._resolver().resolve(credential, cached)

        outcome = await self._resolver().check(credential)
        if not outcome.is_valid:
            if outcome.reason == FailureReason.TRANSPORT_ERROR:
                failure = TransportError(outcome.message)
                self.notify(f"Could not reach LinkedIn: {failure.message}")
            else:
                failure = ValidationFailed(status=outcome.status)
                self.notify(f"{failure.message}. Please update it in settings.")
            self.last_failure = failure.to_result()
            return None

        self.store.remember_identity(outcome.identity)
        self.save_settings()
        return outcome.identity

    async def open_composer(self) -> Optional[PostComposer]:
        """
        Run the create-post command up to the point where the composer opens.

        Returns:
            A PostComposer bound to the resolved identity, or None when the
            token is missing or could not be resolved
        """
        self.logger.log_command_execution(CREATE_POST_COMMAND)
        self.last_failure = None
        credential = self.store.credential
        if not credential:
            self.last_failure = CredentialMissing().to_result()
            self.notify("Please configure your LinkedIn access token in settings first")
            return None

        identity = await self._identity(credential)
        if identity is None:
            return None

        return PostComposer(
            self._publisher(credential),
            identity,
            notify=self.notify,
            logger=self.logger
        )

    async def publish_text(self, text: str) -> PublishResult:
        """Open a composer, fill it with ``text`` and submit once."""
        composer = await self.open_composer()
        if composer is None:
            return self.last_failure
        composer.set_content(text)
        with self.logger.timer(CREATE_POST_COMMAND):
            return await composer.submit()
