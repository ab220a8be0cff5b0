from functools import lru_cache
from pathlib import Path
from typing import Optional
import shutil
import tempfile
from fastapi import Depends, UploadFile
from ..config import Settings, get_settings
from ..platforms.linkedin import LinkedInOAuth
from ..utils.crypto import FernetEncryption
from ..utils.logger import get_logger

logger = get_logger(__name__)

@lru_cache()
def get_state_crypto(key: Optional[str] = None) -> FernetEncryption:
    """One cipher per key, so states survive between the redirect and the callback."""
    return FernetEncryption(key)

def get_oauth_handler(settings: Settings = Depends(get_settings)) -> LinkedInOAuth:
    """Build the LinkedIn handler from the configured credentials."""
    return LinkedInOAuth(
        credentials=settings.linkedin_credentials,
        crypto=get_state_crypto(settings.ENCRYPTION_KEY),
        timeout=settings.HTTP_TIMEOUT,
        default_scopes=settings.scopes
    )

def save_upload_to_temp(upload: UploadFile) -> str:
    """Write an uploaded file to a transient file and return its path."""
    suffix = Path(upload.filename or "").suffix
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        try:
            upload.file.seek(0)
            shutil.copyfileobj(upload.file, tmp)
        except OSError:
            tmp.close()
            remove_temp_file(tmp.name)
            raise
        logger.debug(f"Stored upload {upload.filename} at {tmp.name}")
        return tmp.name

def remove_temp_file(path: Optional[str]) -> None:
    if not path:
        return
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove transient upload {path}: {str(e)}")
