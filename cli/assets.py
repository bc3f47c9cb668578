"""
Asset commands - upload and manage media files in the workspace.

Uploads are two requests:
1. POST the file's metadata; the API creates the asset record and answers
   with a pre-signed upload URL
2. PUT the raw bytes to that URL

If step 2 fails the record from step 1 is left in place and the error names
its id so it can be deleted or retried by hand.
"""

import logging
from pathlib import Path

import click

from core.errors import HyError, MalformedResponseError, UploadError
from core.media import ASSET_TYPES, detect_asset_type, detect_mime_type
from core.models import Asset, AssetList, UploadTarget
from core.prompts import confirm
from core.renderer import format_bytes, render_fields, render_table, truncate
from .common import echo_json, pass_hy, success

logger = logging.getLogger(__name__)

ASSETS_PATH = "/workspaces/{workspace_id}/assets"
ASSET_PATH = "/workspaces/{workspace_id}/assets/{asset_id}"


@click.group(name="assets")
def assets_cmd():
    """Manage media assets

    \b
    Examples:
      hy assets list --type video
      hy assets upload ./intro.mp4 --name "Intro"
      hy assets delete asset_abc123
    """
    pass


@assets_cmd.command("list")
@click.option(
    "--type", "asset_type",
    type=click.Choice(ASSET_TYPES, case_sensitive=False),
    help="Only show assets of this type"
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=20,
    show_default=True,
    help="Maximum number of assets"
)
@pass_hy
def list_assets(hy, asset_type, limit):
    """List assets in the workspace"""
    with hy.client() as client:
        data = client.call(
            "GET", ASSETS_PATH,
            params=[("limit", limit), ("type", asset_type.lower() if asset_type else None)],
        )

    result = AssetList.from_dict(data)
    rows = [(a.id, truncate(a.name), a.type, format_bytes(a.size_bytes)) for a in result.assets]
    click.echo(render_table(["ID", "NAME", "TYPE", "SIZE"], rows, "No assets found"))

    if result.has_more and result.assets:
        click.echo("\n(more results available, use --limit to see more)")


@assets_cmd.command("get")
@click.argument("asset_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw API response")
@pass_hy
def get_asset(hy, asset_id, as_json):
    """Show one asset"""
    with hy.client() as client:
        data = client.call("GET", ASSET_PATH, path_params={"asset_id": asset_id})

    if as_json:
        echo_json(data)
        return

    asset = Asset.from_dict(data)
    click.echo(render_fields([
        ("ID", asset.id),
        ("Name", asset.name),
        ("Type", asset.type),
        ("MIME Type", asset.mime_type),
        ("Size", format_bytes(asset.size_bytes)),
        ("Uploaded", asset.uploaded_at),
        ("Download", asset.download_url),
    ]))


@assets_cmd.command("upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--type", "asset_type",
    type=click.Choice(ASSET_TYPES, case_sensitive=False),
    help="Asset type (default: from the MIME type)"
)
@click.option("--name", help="Asset name (default: the file name)")
@click.option("--mime-type", help="MIME type (default: from the file extension)")
@pass_hy
def upload_asset(hy, path, asset_type, name, mime_type):
    """Upload a media file"""
    mime_type = mime_type or detect_mime_type(path)
    asset_type = (asset_type or detect_asset_type(mime_type)).lower()
    name = name or path.name
    size = path.stat().st_size

    with hy.client() as client:
        target = UploadTarget.from_dict(client.call("POST", ASSETS_PATH, body={
            "name": name,
            "type": asset_type,
            "mimeType": mime_type,
            "fileName": path.name,
            "sizeBytes": size,
        }))
        if not target.upload_url:
            raise MalformedResponseError(
                f"API did not return an upload URL for asset {target.id}"
            )

        logger.debug(f"Asset {target.id} created, uploading {size} bytes")
        result = client.upload_file(target.upload_url, path, mime_type)
        try:
            result.raise_for_error()
        except HyError as e:
            raise UploadError(target.id, str(e)) from e

    success(f"Uploaded asset: {target.id}")
    click.echo(render_fields([
        ("  Name", name),
        ("  Type", asset_type),
        ("  Size", format_bytes(size)),
    ]))


@assets_cmd.command("delete")
@click.argument("asset_id")
@click.option("--force", "-f", is_flag=True, help="Skip the confirmation prompt")
@pass_hy
def delete_asset(hy, asset_id, force):
    """Delete an asset"""
    with hy.client() as client:
        if not force and not confirm(f"Delete asset {asset_id}?"):
            click.echo("Cancelled")
            return

        client.call("DELETE", ASSET_PATH, path_params={"asset_id": asset_id})

    success(f"Deleted asset: {asset_id}")
