import os
import stat
from pathlib import Path
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from .logger import get_logger

logger = get_logger(__name__)

class KeyManager:
    """Loads the Fernet key from disk, generating one on first use."""

    def __init__(self, key_path: str):
        self.key_path = Path(key_path)
        self.key_path.parent.mkdir(parents=True, exist_ok=True)
        self.key = self._load_or_create_key()

        # Set file permissions to be readable only by owner
        os.chmod(self.key_path, stat.S_IRUSR | stat.S_IWUSR)

    def _load_or_create_key(self) -> bytes:
        """
        Load existing key or create new one.

        Returns:
            Bytes containing the encryption key
        """
        try:
            if self.key_path.exists():
                key = self.key_path.read_bytes().strip()
                if self._is_valid_key(key):
                    return key
                logger.warning("Invalid key format found, generating new key")

            key = Fernet.generate_key()
            self.key_path.write_bytes(key)
            logger.info(f"Generated new encryption key at {self.key_path}")
            return key

        except OSError as e:
            logger.error(f"Error handling encryption key: {str(e)}")
            raise

    @staticmethod
    def _is_valid_key(key: bytes) -> bool:
        try:
            Fernet(key)
            return True
        except ValueError:
            return False

    def get_fernet(self) -> Fernet:
        return Fernet(self.key)


class FernetEncryption:
    """Handles encryption and decryption of the stored access token."""

    def __init__(self, key: Optional[str] = None, key_path: Optional[str] = None):
        if key:
            try:
                self.cipher_suite = Fernet(key.encode())
            except ValueError as e:
                logger.error(f"Invalid encryption key format: {str(e)}")
                raise ValueError("Encryption key must be 32 url-safe base64-encoded bytes")
        elif key_path:
            self.cipher_suite = KeyManager(key_path).get_fernet()
        else:
            raise ValueError("Either an encryption key or a key path is required")

    def encrypt(self, data: str) -> str:
        """Encrypt string data."""
        if not isinstance(data, str):
            raise ValueError(f"Data must be string, got {type(data)}")
        return self.cipher_suite.encrypt(data.encode()).decode()

    def decrypt(self, encrypted_data: str) -> str:
        """Decrypt encrypted string."""
        if not isinstance(encrypted_data, str):
            raise ValueError(f"Encrypted data must be string, got {type(encrypted_data)}")
        try:
            return self.cipher_suite.decrypt(encrypted_data.encode()).decode()
        except InvalidToken:
            logger.error("Decryption error: token was encrypted with a different key")
            raise
