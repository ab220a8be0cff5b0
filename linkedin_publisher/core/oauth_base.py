from abc import ABC, abstractmethod
from typing import Dict, Optional, List
from datetime import datetime
import json
import secrets
from ..config import LinkedInCredentials
from ..utils.crypto import FernetEncryption
from ..utils.logger import get_logger

logger = get_logger(__name__)

class OAuthBase(ABC):
    """Base class for OAuth 2.0 authorization-code implementations."""

    def __init__(self, credentials: LinkedInCredentials, crypto: Optional[FernetEncryption] = None):
        self.credentials = credentials
        self.crypto = crypto or FernetEncryption()
        # Extract base platform name without 'OAuth' suffix
        self.platform_name = self.__class__.__name__.lower().replace('oauth', '')

    @property
    def client_id(self) -> str:
        return self.credentials.client_id

    @property
    def redirect_uri(self) -> str:
        return self.credentials.redirect_uri

    def generate_state(self) -> str:
        """
        Generate an encrypted, self-verifying state token.

        Returns:
            str: Encrypted state string
        """
        state_data = {
            'nonce': secrets.token_urlsafe(16),
            'platform': self.platform_name,
            'timestamp': datetime.utcnow().timestamp()
        }
        logger.debug(f"Generating state for platform {self.platform_name}")
        return self.crypto.encrypt(json.dumps(state_data))

    def verify_state(self, state: Optional[str], max_age: Optional[int] = None) -> Optional[Dict]:
        """
        Verify a state token produced by generate_state.

        Args:
            state: State string from the OAuth callback
            max_age: Maximum token age in seconds

        Returns:
            Optional[Dict]: Decoded state data or None if invalid
        """
        if not state:
            logger.warning("No state received on callback")
            return None

        state_json = self.crypto.decrypt(state, ttl=max_age)
        if state_json is None:
            logger.warning(f"Invalid or expired state: {state[:30]}...")
            return None

        try:
            state_data = json.loads(state_json)
        except json.JSONDecodeError as e:
            logger.error(f"Error decoding state: {str(e)}")
            return None

        state_platform = state_data.get('platform', '')
        if state_platform.lower() != self.platform_name.lower():
            logger.warning(f"Platform mismatch. Expected: {self.platform_name}, Got: {state_platform}")
            return None

        return state_data

    @abstractmethod
    async def get_authorization_url(self, state: Optional[str] = None, scopes: Optional[List[str]] = None) -> str:
        """Get the authorization URL for OAuth flow."""
        pass

    @abstractmethod
    async def get_access_token(self, code: str, redirect_uri: Optional[str] = None, timeout: Optional[float] = None) -> str:
        """Exchange authorization code for access token."""
        pass
