import click

from .._version import __version__
from .cli_request import request


@click.group()
@click.version_option(__version__, prog_name="odata-client")
def cli() -> None:
    """Build and send OData requests."""


cli.add_command(request)
