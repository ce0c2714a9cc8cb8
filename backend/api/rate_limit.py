"""
Rate limiter instance — shared by main.py and the theme preset routes.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client address; in-memory storage
limiter = Limiter(key_func=get_remote_address)

COMMAND_RATE_LIMIT = "10/minute"
