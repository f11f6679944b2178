from tournament_client.core.config.settings import Settings
from tournament_client.domain.value_objects import TokenName, get_token_max_age


def token_max_age(name: TokenName, token: str, config: Settings) -> int:
    """Seconds a stored token should live.

    The JWT ``exp`` claim wins when it lies in the future; otherwise the
    configured default for that half of the pair applies.
    """
    if name is TokenName.ACCESS:
        default = config.ACCESS_TOKEN_DEFAULT_MAX_AGE
    else:
        default = config.REFRESH_TOKEN_DEFAULT_MAX_AGE
    max_age = get_token_max_age(token)
    return max_age if max_age is not None else default
