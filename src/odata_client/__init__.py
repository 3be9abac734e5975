"""OData client request building and sending.

The central type is ClientRequest, an immutable description of one HTTP request.
Behaviors transform requests before they are sent and BaseService performs the
HTTP call.
"""

from ._config import Config
from ._request import ClientRequest
from ._services import BaseService
from ._version import __version__
from .behaviors import (
    BasicAuthBehavior,
    BearerTokenBehavior,
    ClientBehavior,
    MethodTunnelingBehavior,
    apply_behaviors,
)
from .models import (
    APIError,
    BaseUrlMissingError,
    EnrichedException,
    ODataClientError,
)

__all__ = [
    "APIError",
    "BaseService",
    "BaseUrlMissingError",
    "BasicAuthBehavior",
    "BearerTokenBehavior",
    "ClientBehavior",
    "ClientRequest",
    "Config",
    "EnrichedException",
    "MethodTunnelingBehavior",
    "ODataClientError",
    "__version__",
    "apply_behaviors",
]
