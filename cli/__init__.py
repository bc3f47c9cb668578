"""Hypewell Studio CLI"""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from core import __version__
from core.config import ConfigStore
from core.context import HyContext
from core.errors import HyError
from core.renderer import format_api_error
from .auth import auth_cmd
from .productions import productions_cmd
from .assets import assets_cmd
from .keys import keys_cmd
from .thread import thread_cmd
from .config import config_cmd

# Load .env file at CLI startup
load_dotenv()

logger = logging.getLogger(__name__)

ALIASES = {
    "prod": "productions",
    "p": "productions",
    "asset": "assets",
    "a": "assets",
}


class HyGroup(click.Group):
    """Root group: resolves command aliases and reports HyErrors as click errors."""

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        # Report the canonical name so usage/help never shows the alias
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except HyError as e:
            logger.debug(f"Command failed: {e!r}")
            exception = click.ClickException(format_api_error(e))
            exception.exit_code = e.exit_code
            raise exception from e


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        ]
    )


@click.group(cls=HyGroup)
@click.version_option(version=__version__, prog_name="hy")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Config file (default: ~/.config/hy/config.json)")
@click.option("--api-url", help="API base URL (overrides HY_API_URL and config)")
@click.option("--workspace", help="Workspace ID (overrides HY_WORKSPACE_ID and config)")
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def main(ctx, config_path, api_url, workspace, verbose):
    """Hypewell Studio - video production from the command line

    \b
    Quick Start:
      hy auth login
      hy productions list
      hy productions create --name "Launch" --topic "Product launch recap"
      hy assets upload ./intro.mp4

    \b
    Commands:
      auth          Log in, log out, show credentials
      productions   Manage productions (alias: prod, p)
      assets        Manage media assets (alias: asset, a)
      keys          Manage API keys
      thread        Chat with the production AI
      config        Manage local configuration
    """
    setup_logging(verbose)

    if ctx.obj is None:
        ctx.obj = HyContext.create(config_path)
    elif config_path:
        ctx.obj.config = ConfigStore(Path(config_path))

    if api_url:
        ctx.obj.api_url_override = api_url
    if workspace:
        ctx.obj.workspace_override = workspace


main.add_command(auth_cmd, name="auth")
main.add_command(productions_cmd, name="productions")
main.add_command(assets_cmd, name="assets")
main.add_command(keys_cmd, name="keys")
main.add_command(thread_cmd, name="thread")
main.add_command(config_cmd, name="config")


if __name__ == "__main__":
    main()
