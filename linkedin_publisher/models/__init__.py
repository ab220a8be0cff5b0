from .oauth_models import (
    Organization,
    CallbackResponse,
    AutoPostCallbackResponse,
    PostResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    'Organization',
    'CallbackResponse',
    'AutoPostCallbackResponse',
    'PostResponse',
    'ErrorResponse',
    'HealthResponse',
]
