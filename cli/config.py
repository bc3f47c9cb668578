"""Configuration commands"""

import click

from core.config import KNOWN_KEYS, SENSITIVE_KEYS, redact
from core.errors import ValidationError
from .common import pass_hy, success


def _display(key, value):
    value = str(value)
    return redact(value) if key in SENSITIVE_KEYS and value else value


def _validate(key, value):
    if key == "timeout":
        try:
            seconds = float(value)
        except ValueError:
            raise ValidationError(f"timeout must be a number of seconds, got {value!r}")
        if seconds <= 0:
            raise ValidationError("timeout must be greater than zero")
    elif key == "api_url" and not value.startswith(("http://", "https://")):
        raise ValidationError("api_url must start with http:// or https://")


@click.group(name="config")
def config_cmd():
    """Manage local configuration

    \b
    Keys:
      api_url        API base URL
      workspace_id   Default workspace
      api_key        API key (only when no system keychain is available)
      timeout        Request timeout in seconds
    """
    pass


@config_cmd.command("get")
@click.argument("key", type=click.Choice(sorted(KNOWN_KEYS)))
@pass_hy
def get_value(hy, key):
    """Show the value commands will use for KEY"""
    creds = hy.credentials
    if key == "api_url":
        value = creds.resolve_api_url()
    elif key == "workspace_id":
        value = creds.resolve_workspace_id()
    elif key == "api_key":
        value = creds.resolve_api_key()
    else:
        value = hy.config.get(key)

    if not value:
        click.echo(f"{key} is not set")
        return
    click.echo(_display(key, value))


@config_cmd.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_KEYS)))
@click.argument("value")
@pass_hy
def set_value(hy, key, value):
    """Set KEY to VALUE in the config file"""
    value = value.strip()
    _validate(key, value)
    hy.config.set(key, value)
    hy.config.save()
    success(f"Set {key} = {_display(key, value)}")


@config_cmd.command("list")
@pass_hy
def list_values(hy):
    """Show everything in the config file"""
    items = hy.config.items()
    if not items:
        click.echo("No configuration set")
        return

    for key in sorted(items):
        click.echo(f"{key} = {_display(key, items[key])}")


@config_cmd.command("path")
@pass_hy
def show_path(hy):
    """Print the config file location"""
    click.echo(str(hy.config.path))
