from pydantic import BaseModel, Field
from typing import Any, Optional, List, Dict
from datetime import datetime

class Organization(BaseModel):
    """An organization page the user administers."""
    id: str
    name: str

class CallbackResponse(BaseModel):
    """Response model for the OAuth callback when pages were found."""
    message: str
    userProfile: Dict[str, Any]
    pages: List[Organization]

class AutoPostCallbackResponse(BaseModel):
    """Response model for the OAuth callback when auto-posting to the first page."""
    message: str
    userProfile: Dict[str, Any]
    postResponse: Any

class PostResponse(BaseModel):
    """Response model for created posts."""
    message: str
    postResponse: Any

class ErrorResponse(BaseModel):
    """Error envelope for the publish route."""
    error: str
    details: Optional[Any] = None

class HealthResponse(BaseModel):
    status: str
    environment: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
