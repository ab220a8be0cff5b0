"""
Core OAuth functionality.
"""

from .exceptions import UpstreamError
from .oauth_base import OAuthBase

__all__ = ['OAuthBase', 'UpstreamError']
