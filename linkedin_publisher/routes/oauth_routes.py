from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool
from typing import Optional
from ..config import Settings, get_settings
from ..core.exceptions import UpstreamError
from ..models.oauth_models import (
    AutoPostCallbackResponse, CallbackResponse, ErrorResponse, PostResponse
)
from ..platforms.linkedin import LinkedInOAuth, extract_organization_id, to_organization
from ..utils.logger import get_logger
from .oauth_utils import get_oauth_handler, remove_temp_file, save_upload_to_temp

logger = get_logger(__name__)
router = APIRouter()

POST_CREATED_MESSAGE = "Post created successfully!"
NO_PAGES_MESSAGE = "No pages found for this user."

@router.get("/")
async def start_linkedin_auth(
    oauth_handler: LinkedInOAuth = Depends(get_oauth_handler)
) -> RedirectResponse:
    """Redirect the caller to the LinkedIn consent screen."""
    state = oauth_handler.generate_state()
    authorization_url = await oauth_handler.get_authorization_url(state=state)
    logger.info("Redirecting to LinkedIn authorization")
    return RedirectResponse(authorization_url, status_code=302)

@router.get("/linkedin/callback")
async def linkedin_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    oauth_handler: LinkedInOAuth = Depends(get_oauth_handler),
    settings: Settings = Depends(get_settings)
):
    """Handle the OAuth redirect and list the pages the user can post to."""
    if not code:
        message = "Code not provided"
        if error:
            message = f"{message}: {error_description or error}"
        logger.warning(message)
        return PlainTextResponse(message, status_code=400)

    if settings.LINKEDIN_VERIFY_STATE and not oauth_handler.verify_state(state, max_age=settings.STATE_TTL_SECONDS):
        return PlainTextResponse("Invalid state parameter", status_code=400)

    try:
        access_token = await oauth_handler.get_access_token(code)
        user_profile = await oauth_handler.get_user_profile(access_token)
        pages = await oauth_handler.get_user_pages(access_token)

        if not pages:
            logger.info("Authenticated user administers no pages")
            return PlainTextResponse(NO_PAGES_MESSAGE)

        if settings.LINKEDIN_AUTO_POST_TEXT:
            # First page wins when auto-posting
            org_id = extract_organization_id(pages[0].get("organization", ""))
            post_response = await oauth_handler.create_post(
                access_token, org_id, settings.LINKEDIN_AUTO_POST_TEXT
            )
            return AutoPostCallbackResponse(
                message=POST_CREATED_MESSAGE,
                userProfile=user_profile,
                postResponse=post_response
            )

        return CallbackResponse(
            message="Select a page to post to.",
            userProfile=user_profile,
            pages=[to_organization(page) for page in pages]
        )

    except UpstreamError as e:
        logger.error(f"LinkedIn callback failed: {str(e)}")
        return PlainTextResponse(str(e), status_code=500)

@router.post("/linkedin/post")
async def post_to_linkedin(
    accessToken: Optional[str] = Form(None),
    orgId: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    oauth_handler: LinkedInOAuth = Depends(get_oauth_handler)
):
    """Publish a post on an organization page, uploading an image first if one is attached."""
    required = {"accessToken": accessToken, "orgId": orgId, "text": text}
    missing = [name for name, value in required.items() if not (value and value.strip())]
    if missing:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Access token, organization ID, and text are required.",
                details=missing
            ).model_dump()
        )

    asset = None
    temp_path = None
    try:
        if file is not None and file.filename:
            temp_path = await run_in_threadpool(save_upload_to_temp, file)
            asset = await oauth_handler.upload_asset(accessToken, orgId, temp_path, file.filename)

        post_response = await oauth_handler.create_post(
            accessToken,
            orgId,
            text,
            asset=asset,
            title=file.filename if asset else None
        )
        return PostResponse(message=POST_CREATED_MESSAGE, postResponse=post_response)

    except UpstreamError as e:
        if asset:
            logger.warning(f"Publish failed after upload, asset {asset} is left orphaned")
        logger.error(f"Error creating LinkedIn post: {str(e)}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=e.message, details=e.details).model_dump()
        )

    finally:
        remove_temp_file(temp_path)
