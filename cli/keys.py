"""API key commands"""

import click

from core.errors import ValidationError
from core.models import DEFAULT_SCOPES, ApiKeyList, CreatedApiKey
from core.prompts import confirm
from core.renderer import render_fields, render_table
from .common import pass_hy, success, warning

KEYS_PATH = "/workspaces/{workspace_id}/keys"
KEY_PATH = "/workspaces/{workspace_id}/keys/{key_id}"


@click.group(name="keys")
def keys_cmd():
    """Manage workspace API keys"""
    pass


@keys_cmd.command("list")
@pass_hy
def list_keys(hy):
    """List API keys (the full key is never shown again after creation)"""
    with hy.client() as client:
        data = client.call("GET", KEYS_PATH)

    result = ApiKeyList.from_dict(data)
    rows = [
        (k.id, k.name, k.key_prefix + "...", k.last_used_at or "never")
        for k in result.keys
    ]
    click.echo(render_table(["ID", "NAME", "PREFIX", "LAST USED"], rows, "No API keys found"))


@keys_cmd.command("create")
@click.option("--name", required=True, help="Key name, e.g. 'CI pipeline'")
@click.option(
    "--scopes",
    default=",".join(DEFAULT_SCOPES),
    show_default=True,
    help="Comma-separated scopes"
)
@pass_hy
def create_key(hy, name, scopes):
    """Create an API key"""
    scope_list = [s.strip() for s in scopes.split(",") if s.strip()]
    if not scope_list:
        raise ValidationError("--scopes must name at least one scope")

    with hy.client() as client:
        data = client.call("POST", KEYS_PATH, body={"name": name, "scopes": scope_list})

    created = CreatedApiKey.from_dict(data)
    success("API key created")
    click.echo()
    click.echo(render_fields([
        ("  ID", created.id),
        ("  Name", created.name or name),
        ("  Scopes", ", ".join(created.scopes or scope_list)),
        ("  Key", created.key),
    ]))
    click.echo()
    warning(created.warning or "Save this key now. It will not be shown again.")


@keys_cmd.command("revoke")
@click.argument("key_id")
@click.option("--force", "-f", is_flag=True, help="Skip the confirmation prompt")
@pass_hy
def revoke_key(hy, key_id, force):
    """Revoke an API key"""
    with hy.client() as client:
        if not force and not confirm(
            f"Revoke API key {key_id}? Anything using it will stop working."
        ):
            click.echo("Cancelled")
            return

        client.call("DELETE", KEY_PATH, path_params={"key_id": key_id})

    success(f"Revoked API key: {key_id}")
