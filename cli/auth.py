"""
Authentication commands.

The API key goes to the system keychain when one is available and falls back
to the config file otherwise. The workspace id always lives in the config file.
"""

import logging

import click

from core.config import redact
from core.context import KEY_SOURCES
from core.errors import ValidationError
from core.login import browser_login
from .common import console, pass_hy, success, warning

logger = logging.getLogger(__name__)

API_KEY_PREFIXES = ("sk_live_", "sk_test_")
WORKSPACE_PREFIX = "ws_"


def _validate_credentials(api_key: str, workspace_id: str) -> None:
    if not api_key.startswith(API_KEY_PREFIXES):
        raise ValidationError("invalid API key format (expected sk_live_... or sk_test_...)")
    if not workspace_id.startswith(WORKSPACE_PREFIX):
        raise ValidationError("invalid workspace ID format (expected ws_...)")


@click.group(name="auth")
def auth_cmd():
    """Log in, log out and inspect credentials"""
    pass


@auth_cmd.command("login")
@click.option("--browser", is_flag=True, help="Log in through the studio website")
@click.option("--no-open", is_flag=True, help="With --browser, print the login URL instead of opening it")
@click.option("--api-key", help="API key (prompted for when omitted)")
@click.option("--workspace-id", help="Workspace ID (prompted for when omitted)")
@pass_hy
def login(hy, browser, no_open, api_key, workspace_id):
    """Store credentials for later commands

    \b
    Examples:
      hy auth login
      hy auth login --browser
      hy auth login --api-key sk_live_... --workspace-id ws_...
    """
    if browser:
        api_url = hy.credentials.resolve_api_url()

        def show_url(url, opened):
            if opened:
                click.echo("Opening browser to log in...")
            click.echo(f"If the browser does not open, visit:\n  {url}")
            click.echo("Waiting for authentication...")

        kwargs = {"open_browser": lambda url: False} if no_open else {}
        result = browser_login(api_url, on_url=show_url, **kwargs)
        api_key = result.api_key
        workspace_id = result.workspace_id or workspace_id or ""
        if not workspace_id:
            workspace_id = click.prompt("Workspace ID (ws_...)").strip()
    else:
        if not api_key:
            click.echo("Create an API key in the studio under Settings > API Keys.")
            api_key = click.prompt("API key (sk_live_...)", hide_input=True)
        if not workspace_id:
            workspace_id = click.prompt("Workspace ID (ws_...)")

    api_key = api_key.strip()
    workspace_id = workspace_id.strip()
    _validate_credentials(api_key, workspace_id)

    if hy.secrets.set(api_key):
        hy.config.unset("api_key")
        logger.debug("API key stored in system keychain")
    else:
        warning("System keychain unavailable, storing the API key in the config file")
        hy.config.set("api_key", api_key)

    hy.config.set("workspace_id", workspace_id)
    hy.config.save()

    success("Authenticated")
    click.echo(f"  Workspace: {workspace_id}")


@auth_cmd.command("logout")
@pass_hy
def logout(hy):
    """Remove stored credentials"""
    hy.secrets.delete()
    hy.config.unset("api_key")
    hy.config.unset("workspace_id")
    hy.config.save()
    success("Logged out")


@auth_cmd.command("status")
@pass_hy
def status(hy):
    """Show the credentials later commands will use"""
    creds = hy.credentials
    api_key, source = creds.api_key_with_source()

    if not api_key:
        console.print("[yellow]Not authenticated[/yellow]")
        click.echo("Run 'hy auth login' to authenticate")
        return

    click.echo("Authenticated")
    click.echo(f"  API Key:   {redact(api_key)}")
    click.echo(f"  Source:    {KEY_SOURCES[source]}")
    click.echo(f"  Workspace: {creds.resolve_workspace_id() or '(not set)'}")
    click.echo(f"  API URL:   {creds.resolve_api_url()}")
