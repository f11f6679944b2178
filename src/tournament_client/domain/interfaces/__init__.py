"""Domain interfaces for dependency inversion.

The refresh coordinator and the auth service depend only on these contracts,
so the storage backend and the host environment can be swapped without
touching the session logic.
"""

from .navigation import ILoginRedirector
from .token_storage import ITokenStorage

__all__ = [
    "ILoginRedirector",
    "ITokenStorage",
]
