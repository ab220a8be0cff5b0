from typing import Any, Dict, List, Mapping, Optional, Tuple
import asyncio
import json
import aiohttp
from urllib.parse import urlencode
from ..config import LinkedInCredentials
from ..core.exceptions import UpstreamError
from ..core.oauth_base import OAuthBase
from ..models.oauth_models import Organization
from ..utils.crypto import FernetEncryption
from ..utils.logger import get_logger

logger = get_logger(__name__)

ORGANIZATION_URN_PREFIX = "urn:li:organization:"
UPLOAD_MECHANISM_KEY = "com.linkedin.digitalmedia.uploading.MediaUploadHttpRequest"
SHARE_CONTENT_KEY = "com.linkedin.ugc.ShareContent"


def extract_organization_id(urn: str) -> str:
    """Return the part of a URN after the last colon, or the input if it has none."""
    return str(urn).rsplit(":", 1)[-1]


def to_organization(element: Dict) -> Organization:
    """Build an Organization from an organizationAcls element."""
    urn = element.get("organization", "")
    details = element.get("organization~") or {}
    return Organization(
        id=extract_organization_id(urn),
        name=details.get("localizedName") or urn
    )


def build_post_payload(org_id: str, text: str, asset: Optional[str] = None, title: Optional[str] = None) -> Dict:
    """
    Build a UGC post payload authored by an organization.

    Args:
        org_id: Organization id (a full URN is accepted too)
        text: Post commentary
        asset: Uploaded image asset URN, if any
        title: Media title shown with the image

    Returns:
        Dictionary ready to send to the ugcPosts endpoint
    """
    if asset:
        share_content = {
            "shareCommentary": {"text": text},
            "shareMediaCategory": "IMAGE",
            "media": [{
                "status": "READY",
                "description": {"text": text},
                "media": asset,
                "title": {"text": title or "Image"}
            }]
        }
    else:
        share_content = {
            "shareCommentary": {"text": text},
            "shareMediaCategory": "NONE",
            "media": []
        }

    return {
        "author": f"{ORGANIZATION_URN_PREFIX}{extract_organization_id(org_id)}",
        "lifecycleState": "PUBLISHED",
        "specificContent": {SHARE_CONTENT_KEY: share_content},
        "visibility": {
            "com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"
        }
    }


def _parse_body(text: str) -> Any:
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class LinkedInOAuth(OAuthBase):
    """LinkedIn OAuth 2.0 flow plus the organization posting API."""

    authorization_endpoint = "https://www.linkedin.com/oauth/v2/authorization"
    token_url = "https://www.linkedin.com/oauth/v2/accessToken"
    api_url = "https://api.linkedin.com/v2"

    # Upload calls run with a 10 second override, looser than the client default
    upload_timeout = 10.0

    def __init__(
        self,
        credentials: LinkedInCredentials,
        crypto: Optional[FernetEncryption] = None,
        timeout: float = 5.0,
        default_scopes: Optional[List[str]] = None
    ):
        super().__init__(credentials, crypto)
        self.timeout = timeout
        self.default_scopes = default_scopes or [
            'openid',
            'profile',
            'email',
            'rw_organization_admin',
            'r_basicprofile',
            'w_organization_social',
            'r_organization_social'
        ]
        logger.debug(f"Initialized LinkedIn OAuth with redirect URI: {self.redirect_uri}")

    def _auth_headers(self, token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "X-Restli-Protocol-Version": "2.0.0",
            "Accept": "application/json"
        }

    async def _request(
        self,
        method: str,
        url: str,
        error_message: str,
        timeout: Optional[float] = None,
        **kwargs
    ) -> Tuple[Any, Mapping[str, str]]:
        """Send one request and return the parsed body and response headers."""
        client_timeout = aiohttp.ClientTimeout(total=timeout if timeout is not None else self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.request(method, url, **kwargs) as response:
                    response_text = await response.text()
                    logger.debug(f"{method} {url.split('?')[0]} -> {response.status}")

                    if not response.ok:
                        logger.error(f"{error_message} (status {response.status}): {response_text}")
                        raise UpstreamError(error_message, _parse_body(response_text), response.status)

                    return _parse_body(response_text), response.headers

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            logger.error(f"{error_message}: {reason}")
            raise UpstreamError(error_message, reason) from e

    async def get_authorization_url(self, state: Optional[str] = None, scopes: Optional[List[str]] = None) -> str:
        """Get LinkedIn authorization URL."""
        final_scopes = scopes or self.default_scopes

        params = {
            'response_type': 'code',
            'client_id': self.client_id,
            'redirect_uri': self.redirect_uri,
            'scope': ' '.join(final_scopes),
            'state': state
        }

        # Remove None values
        params = {k: v for k, v in params.items() if v is not None}

        authorization_url = f"{self.authorization_endpoint}?{urlencode(params)}"
        logger.debug(f"Generated authorization URL with scopes: {params['scope']}")
        return authorization_url

    async def get_access_token(self, code: str, redirect_uri: Optional[str] = None, timeout: Optional[float] = None) -> str:
        """
        Exchange authorization code for access token.

        The redirect URI must match the one registered with the LinkedIn app.
        """
        logger.debug(f"Exchanging code for access token. Code: {code[:10]}...")

        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "client_id": self.client_id,
            "client_secret": self.credentials.client_secret
        }

        body, _ = await self._request(
            "POST",
            self.token_url,
            "Error fetching access token",
            timeout=timeout,
            data=data,
            headers={
                'Content-Type': 'application/x-www-form-urlencoded',
                'Accept': 'application/json'
            }
        )

        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            raise UpstreamError("Error fetching access token", body)
        return access_token

    async def get_user_profile(self, token: str) -> Dict:
        """Get the authenticated member's profile."""
        body, _ = await self._request(
            "GET",
            f"{self.api_url}/me",
            "Error fetching user profile",
            headers=self._auth_headers(token)
        )
        if not isinstance(body, dict):
            raise UpstreamError("Error fetching user profile", body)
        return body

    async def get_user_pages(self, token: str) -> List[Dict]:
        """Get organization ACL entries where the member is an administrator."""
        url = (
            f"{self.api_url}/organizationAcls?q=roleAssignee&role=ADMINISTRATOR"
            "&projection=(elements*(organization,role,state,organization~(localizedName)))"
        )
        body, _ = await self._request(
            "GET",
            url,
            "Error fetching LinkedIn pages",
            headers=self._auth_headers(token)
        )
        elements = body.get("elements", []) if isinstance(body, dict) else []
        logger.debug(f"Found {len(elements)} administered pages")
        return elements

    async def register_upload(self, token: str, org_id: str) -> Tuple[str, str]:
        """
        Register an image upload owned by an organization.

        Returns:
            Tuple of (upload URL, asset URN)
        """
        register_data = {
            "registerUploadRequest": {
                "owner": f"{ORGANIZATION_URN_PREFIX}{extract_organization_id(org_id)}",
                "recipes": ["urn:li:digitalmediaRecipe:feedshare-image"],
                "serviceRelationships": [{
                    "relationshipType": "OWNER",
                    "identifier": "urn:li:userGeneratedContent"
                }],
                "supportedUploadMechanism": ["SYNCHRONOUS_UPLOAD"]
            }
        }

        headers = self._auth_headers(token)
        headers["Content-Type"] = "application/json"

        body, _ = await self._request(
            "POST",
            f"{self.api_url}/assets?action=registerUpload",
            "Error registering upload",
            timeout=self.upload_timeout,
            json=register_data,
            headers=headers
        )

        try:
            value = body["value"]
            upload_url = value["uploadMechanism"][UPLOAD_MECHANISM_KEY]["uploadUrl"]
            asset = value["asset"]
        except (KeyError, TypeError):
            raise UpstreamError("Error registering upload", body)

        logger.debug(f"Upload registered for asset {asset}")
        return upload_url, asset

    async def upload_image(self, token: str, upload_url: str, file_path: str) -> None:
        """Stream a local file to a registered upload URL."""
        with open(file_path, "rb") as image_file:
            await self._request(
                "PUT",
                upload_url,
                "Error uploading image",
                timeout=self.upload_timeout,
                data=image_file,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/octet-stream"
                }
            )

    async def upload_asset(self, token: str, org_id: str, file_path: str, filename: Optional[str] = None) -> str:
        """Register an upload, send the file, and return the asset URN."""
        logger.info(f"Uploading {filename or file_path} for organization {org_id}")
        upload_url, asset = await self.register_upload(token, org_id)
        await self.upload_image(token, upload_url, file_path)
        logger.info(f"Upload completed for asset {asset}")
        return asset

    async def create_post(
        self,
        token: str,
        org_id: str,
        text: str,
        asset: Optional[str] = None,
        title: Optional[str] = None
    ) -> Any:
        """
        Publish a post on an organization page.

        Returns:
            The provider's response body
        """
        post_data = build_post_payload(org_id, text, asset=asset, title=title)
        logger.debug(f"Creating post for {post_data['author']} with media category "
                     f"{post_data['specificContent'][SHARE_CONTENT_KEY]['shareMediaCategory']}")

        headers = self._auth_headers(token)
        headers["Content-Type"] = "application/json"

        body, response_headers = await self._request(
            "POST",
            f"{self.api_url}/ugcPosts",
            "Error posting on LinkedIn",
            json=post_data,
            headers=headers
        )

        # ugcPosts may answer 201 with an empty body and the id in a header
        if body == {} and response_headers.get("X-RestLi-Id"):
            body = {"id": response_headers["X-RestLi-Id"]}

        logger.info("Post created successfully")
        return body
