"""Login redirect interface.

When a session cannot be recovered the user has to log in again. Interactive
hosts (a browser shell, a desktop UI, a server-rendered BFF) provide an
implementation of this interface; headless callers pass none and simply get
the refresh error.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILoginRedirector(ABC):
    """Interface for sending the user back to the login page.

    The path the user was on is remembered so that, once they have logged in
    again, they can be returned to it.
    """

    @abstractmethod
    def current_path(self) -> str:
        """Returns the path the user is currently on."""
        raise NotImplementedError

    @abstractmethod
    def remember_path(self, path: str) -> None:
        """Stores the path to return to after login."""
        raise NotImplementedError

    @abstractmethod
    def consume_remembered_path(self) -> Optional[str]:
        """Returns and forgets the stored path, or None if nothing is stored."""
        raise NotImplementedError

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Moves the user to ``url``."""
        raise NotImplementedError
