import os
import pytest
from cryptography.fernet import Fernet

# Settings are read once on import of the app
os.environ.setdefault('LINKEDIN_CLIENT_ID', 'test_id')
os.environ.setdefault('LINKEDIN_CLIENT_SECRET', 'test_secret')
os.environ.setdefault('LINKEDIN_REDIRECT_URI', 'http://localhost:3000/linkedin/callback')
os.environ.setdefault('ENCRYPTION_KEY', Fernet.generate_key().decode())
os.environ['ENVIRONMENT'] = 'testing'

from aioresponses import aioresponses  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from linkedin_publisher.config import LinkedInCredentials, get_settings  # noqa: E402
from linkedin_publisher.main import app  # noqa: E402
from linkedin_publisher.platforms import LinkedInOAuth  # noqa: E402
from linkedin_publisher.routes.oauth_utils import get_oauth_handler  # noqa: E402
from linkedin_publisher.utils.crypto import FernetEncryption  # noqa: E402

TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
PROFILE_URL = "https://api.linkedin.com/v2/me"
REGISTER_UPLOAD_URL = "https://api.linkedin.com/v2/assets?action=registerUpload"
POSTS_URL = "https://api.linkedin.com/v2/ugcPosts"
UPLOAD_URL = "https://api.linkedin.com/mediaUpload/C4E22AQ/uploaded-image"
ASSET = "urn:li:digitalmediaAsset:C4E22AQ"

@pytest.fixture
def credentials():
    return LinkedInCredentials(
        client_id="test_id",
        client_secret="test_secret",
        redirect_uri="http://localhost:3000/linkedin/callback"
    )

@pytest.fixture
def oauth(credentials):
    """LinkedIn handler with its own state key."""
    return LinkedInOAuth(
        credentials=credentials,
        crypto=FernetEncryption(Fernet.generate_key().decode())
    )

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def valid_state():
    """A state issued by the same handler configuration the app uses."""
    return get_oauth_handler(get_settings()).generate_state()

@pytest.fixture
def mock_linkedin():
    """Intercept all aiohttp traffic to LinkedIn."""
    with aioresponses() as m:
        yield m

@pytest.fixture
def register_upload_response():
    return {
        "value": {
            "uploadMechanism": {
                "com.linkedin.digitalmedia.uploading.MediaUploadHttpRequest": {
                    "uploadUrl": UPLOAD_URL,
                    "headers": {}
                }
            },
            "mediaArtifact": "urn:li:digitalmediaMediaArtifact:(urn:li:digitalmediaAsset:C4E22AQ,urn:li:digitalmediaMediaArtifactClass:feedshare-uploadedImage)",
            "asset": ASSET
        }
    }

@pytest.fixture
def acl_elements():
    return [
        {
            "organization": "urn:li:organization:12345",
            "role": "ADMINISTRATOR",
            "state": "APPROVED",
            "organization~": {"localizedName": "Acme Corp"}
        },
        {
            "organization": "urn:li:organization:67890",
            "role": "ADMINISTRATOR",
            "state": "APPROVED"
        }
    ]

def upstream_calls(mock):
    """Flatten recorded aiohttp requests into (method, url, call) tuples."""
    return [
        (method, str(url), call)
        for (method, url), calls in mock.requests.items()
        for call in calls
    ]
