import json
from typing import Any, Dict, Optional, Tuple

import click
from pydantic import ValidationError

from .._config import Config
from .._request import ClientRequest
from .._services import BaseService
from .._utils import handle_errors
from .._utils.constants import (
    HTTP_METHOD_DELETE,
    HTTP_METHOD_GET,
    HTTP_METHOD_MERGE,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
)
from ..models.errors import ODataClientError

_BODYLESS_FACTORIES = {
    HTTP_METHOD_GET: ClientRequest.get,
    HTTP_METHOD_DELETE: ClientRequest.delete,
}

_ENTRY_FACTORIES = {
    HTTP_METHOD_POST: ClientRequest.post,
    HTTP_METHOD_PUT: ClientRequest.put,
    HTTP_METHOD_MERGE: ClientRequest.merge,
}


def _parse_pairs(
    values: Tuple[str, ...], separator: str, option: str
) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for raw in values:
        name, found, value = raw.partition(separator)
        if not found or not name.strip():
            raise click.BadParameter(
                f"expected NAME{separator}VALUE, got '{raw}'", param_hint=option
            )
        pairs[name.strip()] = value.strip()
    return pairs


def build_request(
    method: str,
    url: str,
    headers: Dict[str, str],
    query_params: Dict[str, str],
    entry: Optional[Any] = None,
) -> ClientRequest:
    """Build a ClientRequest the same way application code would.

    The method is upper-cased. Standard verbs go through their factory, anything
    else starts from a GET and has its method replaced.
    """
    verb = method.upper()
    if verb in _ENTRY_FACTORIES:
        request = _ENTRY_FACTORIES[verb](url, entry)
    elif verb in _BODYLESS_FACTORIES:
        request = _BODYLESS_FACTORIES[verb](url)
        if entry is not None:
            request = request.with_entry(entry)
    else:
        request = ClientRequest.get(url).with_method(verb).with_entry(entry)

    for name, value in headers.items():
        request = request.with_header(name, value)
    for name, value in query_params.items():
        request = request.with_query_param(name, value)
    return request


def _describe(request: ClientRequest) -> Dict[str, Any]:
    return {
        "method": request.method,
        "url": request.url,
        "headers": dict(request.headers),
        "query_params": dict(request.query_params),
        "entry": request.entry,
    }


@click.command()
@click.argument("method")
@click.argument("url")
@click.option(
    "--header", "-H", "headers", multiple=True, help="Request header as Name:Value."
)
@click.option(
    "--query", "-q", "query", multiple=True, help="Query parameter as name=value."
)
@click.option("--data", "-d", help="JSON payload sent as the request body.")
@click.option(
    "--send",
    is_flag=True,
    default=False,
    help="Send the request using the ODATA_* environment configuration.",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Load configuration from this .env file before sending.",
)
def request(
    method: str,
    url: str,
    headers: Tuple[str, ...],
    query: Tuple[str, ...],
    data: Optional[str],
    send: bool,
    env_file: Optional[str],
) -> None:
    """Build an OData request and print it, or send it with --send.

    METHOD is case-insensitive and always sent upper-cased.
    """
    entry = None
    if data is not None:
        try:
            entry = json.loads(data)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data") from e

    client_request = build_request(
        method,
        url,
        _parse_pairs(headers, ":", "--header"),
        _parse_pairs(query, "=", "--query"),
        entry,
    )

    if not send:
        click.echo(json.dumps(_describe(client_request), indent=2))
        return

    try:
        config = Config.from_env(dotenv_path=env_file)
        with BaseService(config) as service, handle_errors():
            response = service.send(client_request)
    except (ODataClientError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    click.echo(str(response.status_code))
    if response.text:
        click.echo(response.text)
