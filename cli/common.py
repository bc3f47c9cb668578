"""Shared helpers for hy commands"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

import click
from rich.console import Console
from rich.markup import escape

from core.context import HyContext
from core.errors import ValidationError

# Fix Windows encoding issues
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.stderr.reconfigure(encoding='utf-8', errors='replace')

console = Console()

# Hands the HyContext built by the root group to a command
pass_hy = click.make_pass_decorator(HyContext)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)


def warning(message: str) -> None:
    console.print(f"[yellow]⚠️  {escape(message)}[/yellow]", soft_wrap=True)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def load_json_object(path: Path, what: str) -> Dict[str, Any]:
    """Read a JSON file that must hold an object."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(f"cannot read {what} file {path}: {e}")
    except ValueError as e:
        raise ValidationError(f"invalid {what} JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ValidationError(f"{what} file {path} must contain a JSON object")
    return data
