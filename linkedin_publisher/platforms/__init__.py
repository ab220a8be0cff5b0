"""
Platform-specific OAuth implementations.
"""

from .linkedin import LinkedInOAuth, build_post_payload, extract_organization_id, to_organization

__all__ = [
    'LinkedInOAuth',
    'build_post_payload',
    'extract_organization_id',
    'to_organization'
]
