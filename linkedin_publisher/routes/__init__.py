from .oauth_routes import router as oauth_router

__all__ = ['oauth_router']
