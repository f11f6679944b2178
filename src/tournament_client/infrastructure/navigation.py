from typing import Dict, List, Optional

from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.domain.interfaces import ILoginRedirector

logger = get_logger(__name__)


class SessionLoginRedirector(ILoginRedirector):
    """Login redirector backed by a per-session key/value store.

    It plays the role of the browser's ``location`` and ``sessionStorage``.
    The pre-login path is stored under ``AUTH_REDIRECT_SESSION_KEY``, and
    every navigation is recorded in ``history`` so that the host (or a test)
    can act on it.

    Args:
        current_path: Path the user is on when the redirector is created.
        session_storage: Mapping shared with the host. A private dict is used
            when omitted.
    """

    def __init__(
        self,
        current_path: str = "/",
        session_storage: Optional[Dict[str, str]] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.session_storage = session_storage if session_storage is not None else {}
        self.history: List[str] = []
        self._current_path = current_path

    def current_path(self) -> str:
        return self._current_path

    def set_current_path(self, path: str) -> None:
        self._current_path = path

    def remember_path(self, path: str) -> None:
        self.session_storage[self.config.AUTH_REDIRECT_SESSION_KEY] = path

    def consume_remembered_path(self) -> Optional[str]:
        return self.session_storage.pop(self.config.AUTH_REDIRECT_SESSION_KEY, None)

    def navigate(self, url: str) -> None:
        logger.info("navigating", url=url, from_path=self._current_path)
        self.history.append(url)
        self._current_path = url
