"""Public façade for the artist_playlists.session package.

Client-side counterpart of the server: token persistence, the session manager
with its one-shot renewal policy, and a client for the /api endpoints.
"""

from .client import ProxyClient
from .manager import (
    InitResult,
    RetryPolicy,
    SessionManager,
    SessionState,
    parse_fragment,
    strip_fragment,
)
from .store import TokenPair, TokenStore

__all__ = [
    "TokenPair",
    "TokenStore",
    "RetryPolicy",
    "SessionState",
    "InitResult",
    "SessionManager",
    "ProxyClient",
    "parse_fragment",
    "strip_fragment",
]
