"""
Cookie-backed token storage.

The pair is kept as two cookies, ``accessToken`` and ``refreshToken``, in a
Mozilla-format cookie jar, the same jar type httpx builds its cookie handling
on. When ``TOKEN_COOKIE_FILE`` is configured the jar is loaded at start-up and
written back after every change, so a session survives process restarts the
way browser cookies survive page reloads.

**Security Note**: the cookie file holds live credentials. Restrict it to the
user running the client and never commit it.
"""

import time
from http.cookiejar import Cookie, LoadError, MozillaCookieJar
from pathlib import Path
from typing import Optional

from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.domain.interfaces import ITokenStorage
from tournament_client.domain.value_objects import TokenName
from tournament_client.infrastructure.token_storage.lifetime import token_max_age

logger = get_logger(__name__)


class CookieTokenStorage(ITokenStorage):
    """Stores tokens as cookies with a max-age taken from the token itself.

    Attributes:
        jar (MozillaCookieJar): The underlying jar. It can be handed to
            ``httpx.AsyncClient(cookies=...)`` when the backend also reads
            the cookies.
    """

    def __init__(self, config: Optional[Settings] = None, filename: Optional[str] = None):
        self.config = config or default_settings
        filename = filename or self.config.TOKEN_COOKIE_FILE
        self.jar = MozillaCookieJar(filename)
        if filename and Path(filename).is_file():
            try:
                self.jar.load(ignore_discard=True)
            except (LoadError, OSError) as e:
                logger.warning("token_cookie_file_unreadable", filename=filename, error=str(e))

    def _find(self, name: TokenName) -> Optional[Cookie]:
        for cookie in self.jar:
            if (
                cookie.name == name.value
                and cookie.domain == self.config.TOKEN_COOKIE_DOMAIN
                and cookie.path == self.config.TOKEN_COOKIE_PATH
            ):
                return cookie
        return None

    def _persist(self) -> None:
        if self.jar.filename:
            self.jar.save(ignore_discard=True)

    async def get_token(self, name: TokenName) -> Optional[str]:
        cookie = self._find(name)
        if cookie is None:
            return None
        if cookie.is_expired():
            await self.remove_token(name)
            return None
        return cookie.value or None

    async def set_token(self, name: TokenName, value: str) -> None:
        max_age = token_max_age(name, value, self.config)
        cookie = Cookie(
            version=0,
            name=name.value,
            value=value,
            port=None,
            port_specified=False,
            domain=self.config.TOKEN_COOKIE_DOMAIN,
            domain_specified=True,
            domain_initial_dot=False,
            path=self.config.TOKEN_COOKIE_PATH,
            path_specified=True,
            secure=self.config.is_production,
            expires=int(time.time()) + max_age,
            discard=False,
            comment=None,
            comment_url=None,
            rest={"SameSite": self.config.TOKEN_COOKIE_SAMESITE},
        )
        self.jar.set_cookie(cookie)
        self._persist()

    async def remove_token(self, name: TokenName) -> None:
        try:
            self.jar.clear(self.config.TOKEN_COOKIE_DOMAIN, self.config.TOKEN_COOKIE_PATH, name.value)
        except KeyError:
            return
        self._persist()
