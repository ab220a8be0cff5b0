"""
LinkedIn Page Publisher
-----------------------
OAuth sign-in with LinkedIn and posting to administered organization pages.
"""

__version__ = "1.0.0"
