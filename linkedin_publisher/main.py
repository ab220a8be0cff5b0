from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from datetime import datetime
import uvicorn
from .config import get_settings
from .models.oauth_models import HealthResponse
from .routes import oauth_router
from .utils.logger import get_logger

# Initialize settings and logger
settings = get_settings()
logger = get_logger(__name__)

# Security Headers Middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "connect-src 'self' https:; "
            "frame-ancestors 'self'"
        )
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting LinkedIn publisher in {settings.ENVIRONMENT} environment")
    logger.info(f"Server is running on http://localhost:{settings.SERVER_PORT}")

    credentials = settings.linkedin_credentials
    logger.debug("LinkedIn Configuration:")
    logger.debug(f"- Client ID configured: {'Yes' if credentials.client_id else 'No'}")
    logger.debug(f"- Redirect URI: {credentials.redirect_uri}")
    logger.debug(f"- State verification: {settings.LINKEDIN_VERIFY_STATE}")
    logger.debug(f"- Auto-post to first page: {'Yes' if settings.LINKEDIN_AUTO_POST_TEXT else 'No'}")

    yield

    logger.info("Shutting down LinkedIn publisher")

# Initialize FastAPI app
app = FastAPI(
    title="LinkedIn Page Publisher",
    description="Authorize with LinkedIn and publish posts on administered organization pages",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

app.add_middleware(SecurityHeadersMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

app.include_router(oauth_router, tags=["linkedin"])

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring."""
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        timestamp=datetime.utcnow()
    )

# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    logger.error(f"HTTP error occurred: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.exception(f"Unhandled error occurred: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

def run() -> None:
    """Start the server with uvicorn."""
    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["access"]["fmt"] = settings.LOG_FORMAT

    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "linkedin_publisher.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        log_config=log_config
    )

# Run the application
if __name__ == "__main__":
    run()
