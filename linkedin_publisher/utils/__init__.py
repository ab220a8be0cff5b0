"""
Utility modules for the LinkedIn publisher.
"""

from .crypto import FernetEncryption
from .logger import get_logger

__all__ = [
    'FernetEncryption',
    'get_logger'
]
