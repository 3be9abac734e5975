import os
import ssl
from typing import Any, Dict, Optional

from .constants import ENV_DISABLE_SSL_VERIFY

DEFAULT_TIMEOUT = 30.0

# CA locations honoured when truststore is not installed, in priority order
_CA_FILE_ENV_VARS = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")
_CA_DIR_ENV_VAR = "SSL_CERT_DIR"


def expand_path(path: Optional[str]) -> Optional[str]:
    """Expand ``$VARS`` and ``~`` in a certificate path."""
    if not path:
        return path
    return os.path.expanduser(os.path.expandvars(path))


def _env_path(name: str) -> Optional[str]:
    return expand_path(os.environ.get(name))


def create_ssl_context() -> ssl.SSLContext:
    """SSL context for outgoing requests.

    Uses the operating system trust store through truststore. Without it, the CA
    bundle named by ``SSL_CERT_FILE`` or ``REQUESTS_CA_BUNDLE`` is used, falling
    back to certifi's bundle, plus any ``SSL_CERT_DIR`` directory.
    """
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        import certifi

        cafile = next(
            (path for path in map(_env_path, _CA_FILE_ENV_VARS) if path),
            certifi.where(),
        )
        return ssl.create_default_context(
            cafile=cafile, capath=_env_path(_CA_DIR_ENV_VAR)
        )


def _ssl_verification_disabled() -> bool:
    return os.environ.get(ENV_DISABLE_SSL_VERIFY, "").lower() in ("1", "true", "yes")


def get_httpx_client_kwargs(timeout: Optional[float] = None) -> Dict[str, Any]:
    """Keyword arguments shared by every httpx client the SDK creates.

    Args:
        timeout: Request timeout in seconds. Defaults to 30 seconds.

    Returns:
        dict: ``verify``, ``timeout`` and ``follow_redirects`` settings.
    """
    verify: Any = False if _ssl_verification_disabled() else create_ssl_context()
    return {
        "verify": verify,
        "timeout": DEFAULT_TIMEOUT if timeout is None else timeout,
        "follow_redirects": True,
    }
