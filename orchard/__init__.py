"""
Orchard core: credentials, sessions, ownership checks and the fruit store.

The HTTP layer lives in the sibling ``orchard_web`` package.
"""

__version__ = "1.0.0"
