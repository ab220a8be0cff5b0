from cryptography.fernet import Fernet, InvalidToken
from typing import Optional
import base64
from .logger import get_logger

logger = get_logger(__name__)

class FernetEncryption:
    """Handles encryption and decryption of short-lived values such as OAuth state."""

    def __init__(self, key: Optional[str] = None):
        if key:
            try:
                if len(base64.urlsafe_b64decode(key)) != 32:
                    raise ValueError("Invalid key length")
                self.cipher_suite = Fernet(key.encode())
            except Exception as e:
                logger.error(f"Invalid encryption key format: {str(e)}")
                raise ValueError("Encryption key must be 32 url-safe base64-encoded bytes")
        else:
            # State only has to survive one redirect round trip in this process
            logger.warning("No ENCRYPTION_KEY configured, using a per-process key")
            self.cipher_suite = Fernet(Fernet.generate_key())

    def encrypt(self, data: str) -> str:
        """Encrypt string data."""
        if not isinstance(data, str):
            raise ValueError(f"Data must be string, got {type(data)}")
        return self.cipher_suite.encrypt(data.encode()).decode()

    def decrypt(self, encrypted_data: str, ttl: Optional[int] = None) -> Optional[str]:
        """Decrypt encrypted string, returning None when invalid or older than ttl seconds."""
        try:
            return self.cipher_suite.decrypt(encrypted_data.encode(), ttl=ttl).decode()
        except (InvalidToken, ValueError) as e:
            logger.warning(f"Decryption failed: {type(e).__name__}")
            return None
