from pathlib import Path
from typing import Optional
import json
from cryptography.fernet import InvalidToken
from pydantic import ValidationError
from ..config import get_settings
from ..models.post_models import Identity, PluginSettings
from ..utils.crypto import FernetEncryption
from ..utils.logger import get_logger

logger = get_logger(__name__)

class SettingsStore:
    """
    Persists plugin settings as JSON, with the access token encrypted at rest.

    Changing the access token drops the cached person URN, since it belonged
    to the previous token.
    """

    def __init__(self, path: Optional[str] = None, crypto: Optional[FernetEncryption] = None):
        settings = get_settings()
        self.path = Path(path or settings.SETTINGS_PATH)
        self.crypto = crypto or FernetEncryption(
            key=settings.ENCRYPTION_KEY,
            key_path=settings.KEY_PATH
        )
        self.settings = PluginSettings(oauth_url=settings.LINKEDIN_OAUTH_URL)

    def load(self) -> PluginSettings:
        """Load settings from disk, keeping defaults for anything missing."""
        if not self.path.exists():
            logger.debug(f"No settings file at {self.path}, using defaults")
            return self.settings

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            token = raw.get("access_token") or ""
            if token:
                raw["access_token"] = self.crypto.decrypt(token)
            self.settings = PluginSettings(**{**self.settings.model_dump(), **raw})
        except InvalidToken:
            logger.error("Stored access token could not be decrypted, it must be entered again")
            self.settings = self.settings.model_copy(update={"access_token": "", "person_urn": ""})
        except ValueError as e:
            logger.error(f"Error reading settings file {self.path}: {str(e)}")
            raise

        logger.debug(f"Settings loaded from {self.path}")
        return self.settings

    def save(self) -> None:
        data = self.settings.model_dump(mode="json")
        if data["access_token"]:
            data["access_token"] = self.crypto.encrypt(data["access_token"])
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug(f"Settings saved to {self.path}")

    @property
    def credential(self) -> str:
        return self.settings.access_token

    @property
    def cached_identity(self) -> Optional[Identity]:
        if not self.settings.person_urn:
            return None
        try:
            return Identity.parse(self.settings.person_urn)
        except ValidationError:
            logger.warning(f"Ignoring malformed cached person URN: {self.settings.person_urn!r}")
            return None

    def set_credential(self, token: str) -> bool:
        """
        Replace the access token.

        Returns:
            True if the token actually changed (and the cached URN was cleared)

        Raises:
            ValueError: the token contains whitespace or control characters
        """
        token = token.strip()
        if any(ch.isspace() or not ch.isprintable() for ch in token):
            raise ValueError("Access token must not contain whitespace or control characters")
        if token == self.settings.access_token:
            return False
        self.settings = self.settings.model_copy(update={"access_token": token, "person_urn": ""})
        return True

    def remember_identity(self, identity: Identity) -> None:
        self.settings = self.settings.model_copy(update={"person_urn": identity.urn})

    def update(self, **changes) -> PluginSettings:
        self.settings = PluginSettings(**{**self.settings.model_dump(), **changes})
        return self.settings
