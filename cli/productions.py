"""Production commands - list, inspect, create, build and delete productions"""

from pathlib import Path

import click

from core.errors import ApiClientError, BuildInProgressError, ValidationError
from core.models import (
    PRODUCTION_STATUSES,
    BuildStarted,
    BuildStatus,
    Production,
    ProductionList,
)
from core.prompts import confirm
from core.renderer import render_dry_run, render_fields, render_table, truncate
from .common import echo_json, load_json_object, pass_hy, success

PRODUCTIONS_PATH = "/workspaces/{workspace_id}/productions"
PRODUCTION_PATH = "/workspaces/{workspace_id}/productions/{production_id}"
BUILD_PATH = "/workspaces/{workspace_id}/productions/{production_id}/build"


@click.group(name="productions")
def productions_cmd():
    """Manage productions (video projects)"""
    pass


@productions_cmd.command("list")
@click.option("--status", type=click.Choice(PRODUCTION_STATUSES, case_sensitive=False),
              help="Only show productions with this status")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True,
              help="Maximum number of productions")
@pass_hy
def list_productions(hy, status, limit):
    """List productions in the workspace"""
    with hy.client() as client:
        data = client.call(
            "GET", PRODUCTIONS_PATH,
            params=[("limit", limit), ("status", status.lower() if status else None)],
        )

    result = ProductionList.from_dict(data)
    rows = [(p.id, p.name, p.status, truncate(p.topic)) for p in result.productions]
    click.echo(render_table(["ID", "NAME", "STATUS", "TOPIC"], rows, "No productions found"))

    if result.has_more and result.productions:
        click.echo("\n(more results available, use --limit to see more)")


@productions_cmd.command("get")
@click.argument("production_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw API response")
@pass_hy
def get_production(hy, production_id, as_json):
    """Show one production"""
    with hy.client() as client:
        data = client.call("GET", PRODUCTION_PATH, path_params={"production_id": production_id})

    if as_json:
        echo_json(data)
        return

    production = Production.from_dict(data)
    click.echo(render_fields([
        ("ID", production.id),
        ("Name", production.name),
        ("Topic", production.topic),
        ("Category", production.category),
        ("Status", production.status),
        ("Spec", "attached" if production.has_spec else "none"),
        ("Created", production.created_at),
        ("Updated", production.updated_at),
    ]))


@productions_cmd.command("create")
@click.option("--name", help="Production name")
@click.option("--topic", help="What the video is about")
@click.option("--category", help="Content category")
@click.option("--spec", "spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON spec file to attach")
@click.option("--from", "from_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON file with the whole production (flags override its fields)")
@click.option("--dry-run", is_flag=True, help="Show what would be created without creating it")
@pass_hy
def create_production(hy, name, topic, category, spec_file, from_file, dry_run):
    """Create a production

    \b
    Examples:
      hy productions create --name "Q3 Recap" --topic "Quarterly results"
      hy productions create --name "Launch" --topic "Launch day" --spec spec.json
      hy productions create --from production.json
    """
    payload = load_json_object(from_file, "production") if from_file else {}

    if name:
        payload["name"] = name
    if topic:
        payload["topic"] = topic
    if category:
        payload["category"] = category
    if spec_file:
        payload["spec"] = load_json_object(spec_file, "spec")

    if not payload.get("name") or not payload.get("topic"):
        raise ValidationError("--name and --topic are required")

    if dry_run:
        click.echo(render_dry_run([
            ("Name", payload["name"]),
            ("Topic", payload["topic"]),
            ("Category", payload.get("category")),
            ("Spec", str(spec_file or from_file) if "spec" in payload else None),
        ]))
        return

    with hy.client() as client:
        data = client.call("POST", PRODUCTIONS_PATH, body=payload)

    production = Production.from_dict(data)
    success(f"Created production: {production.id}")
    click.echo(render_fields([
        ("  Name", production.name),
        ("  Topic", production.topic),
        ("  Status", production.status),
    ]))


@productions_cmd.command("build")
@click.argument("production_id")
@click.option("--validate-only", is_flag=True, help="Check the production is buildable without starting a build")
@pass_hy
def build_production(hy, production_id, validate_only):
    """Start a build for a production"""
    path_params = {"production_id": production_id}

    with hy.client() as client:
        production = Production.from_dict(
            client.call("GET", PRODUCTION_PATH, path_params=path_params)
        )
        if not production.has_spec:
            raise ValidationError(
                f"production {production_id} has no spec. Add a spec before building"
            )

        if validate_only:
            click.echo(f"[validate-only] Production {production_id} is ready to build")
            click.echo(render_fields([
                ("  Name", production.name),
                ("  Status", production.status),
                ("  Spec", "✓ valid"),
            ]))
            return

        try:
            data = client.call("POST", BUILD_PATH, path_params=path_params)
        except ApiClientError as e:
            if e.status_code == 409:
                raise BuildInProgressError(e.status_code, e.body) from e
            raise

    build = BuildStarted.from_dict(data)
    success(f"Build started for {production_id}")
    click.echo(render_fields([
        ("  Build ID", build.build_id),
        ("  Status", build.status),
    ]))
    if build.message:
        click.echo(f"  {build.message}")
    click.echo(f"\nUse 'hy productions status {production_id}' to check progress")


@productions_cmd.command("status")
@click.argument("production_id")
@pass_hy
def build_status(hy, production_id):
    """Show the build status of a production"""
    with hy.client() as client:
        data = client.call("GET", BUILD_PATH, path_params={"production_id": production_id})

    status = BuildStatus.from_dict(data)
    click.echo(render_fields([
        ("Production", status.id or production_id),
        ("Status", status.status),
        ("Build ID", status.build_id),
        ("Finished", status.build_finished_at),
        ("Logs", status.build_log_url),
        ("Output", status.output_url),
    ]))


@productions_cmd.command("delete")
@click.argument("production_id")
@click.option("--force", "-f", is_flag=True, help="Skip the confirmation prompt")
@pass_hy
def delete_production(hy, production_id, force):
    """Delete a production"""
    with hy.client() as client:
        if not force and not confirm(
            f"Delete production {production_id}? This can be undone within 30 days."
        ):
            click.echo("Cancelled")
            return

        client.call("DELETE", PRODUCTION_PATH, path_params={"production_id": production_id})

    success(f"Deleted production: {production_id}")
    click.echo("  (Will be permanently removed after 30 days)")
