from ._errors import handle_errors
from ._ssl_context import get_httpx_client_kwargs
from .constants import USER_AGENT_PREFIX


def user_agent_value(version: str) -> str:
    return f"{USER_AGENT_PREFIX}/{version}"


__all__ = [
    "get_httpx_client_kwargs",
    "handle_errors",
    "user_agent_value",
]
