from .errors import (
    APIError,
    BaseUrlMissingError,
    ODataClientError,
)
from .exceptions import EnrichedException

__all__ = [
    "APIError",
    "BaseUrlMissingError",
    "EnrichedException",
    "ODataClientError",
]
