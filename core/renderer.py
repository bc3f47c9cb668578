"""
Response rendering for terminal output.

All functions return plain text; commands decide where to print it.

Rules:
- Tables keep the API's order, always print a header, and collapse to a
  single "No <things> found" line when empty.
- Key/value blocks omit fields that are None or empty.
- Byte sizes are base 1024 with one decimal ("500 B", "1.0 KB", "1.5 KB").
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .models import ChatReply, ThreadHistory

BYTE_UNITS = ["KB", "MB", "GB", "TB", "PB", "EB"]
COLUMN_PADDING = 2
TRUNCATE_AT = 40
TRUNCATE_KEEP = 37

ROLE_PREFIXES = {
    "user": "You:",
    "assistant": "AI:",
    "system": "System:",
}


def format_bytes(num_bytes: int) -> str:
    """Human-readable size, e.g. 1536 -> "1.5 KB"."""
    if num_bytes < 1024:
        return f"{num_bytes} B"

    divisor = 1024
    exponent = 0
    n = num_bytes // 1024
    while n >= 1024 and exponent < len(BYTE_UNITS) - 1:
        divisor *= 1024
        exponent += 1
        n //= 1024
    return f"{num_bytes / divisor:.1f} {BYTE_UNITS[exponent]}"


def truncate(text: str) -> str:
    """Cut long table cells to 37 characters plus "..."."""
    if len(text) > TRUNCATE_AT:
        return text[:TRUNCATE_KEEP] + "..."
    return text


def render_table(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    empty_message: str,
) -> str:
    """
    Render rows as left-aligned columns separated by two spaces.

    Args:
        headers: Column titles, in display order
        rows: One sequence of cell values per entity, in API order
        empty_message: Printed alone when there are no rows

    Returns:
        The table, or exactly `empty_message` when `rows` is empty
    """
    body = [["" if cell is None else str(cell) for cell in row] for row in rows]
    if not body:
        return empty_message

    lines = [list(headers)] + body
    widths = [max(len(line[i]) for line in lines) for i in range(len(headers))]

    rendered = []
    for line in lines:
        cells = [
            cell.ljust(widths[i] + COLUMN_PADDING) if i < len(line) - 1 else cell
            for i, cell in enumerate(line)
        ]
        rendered.append("".join(cells).rstrip())
    return "\n".join(rendered)


def render_fields(fields: Iterable[Tuple[str, Any]]) -> str:
    """
    Render `Label: value` lines with values aligned.

    Fields whose value is None, "" or an empty collection are left out.
    """
    present = [
        (label, value) for label, value in fields
        if value is not None and value != "" and value != [] and value != {}
    ]
    if not present:
        return ""

    width = max(len(label) for label, _ in present) + 1
    return "\n".join(f"{label + ':':<{width}} {value}" for label, value in present)


def render_chat_reply(reply: ChatReply) -> str:
    """Assistant text followed by any suggested changes."""
    lines: List[str] = [reply.assistant_message.content]
    if reply.suggested_changes:
        lines.append("")
        lines.append("Suggested changes:")
        for change in reply.suggested_changes:
            lines.append(f"  • {change.description or change.type}")
    return "\n".join(lines)


def render_history(history: ThreadHistory) -> str:
    if not history.messages:
        return "No messages in thread"

    blocks = []
    for message in history.messages:
        prefix = ROLE_PREFIXES.get(message.role, f"{message.role.title()}:")
        blocks.append(f"{prefix}\n{message.content}")
    return "\n\n".join(blocks)


def render_dry_run(fields: Iterable[Tuple[str, Optional[str]]]) -> str:
    """Preview of a request that was not sent."""
    body = render_fields(fields)
    return "[dry-run] Would create production:\n" + "\n".join(
        f"  {line}" for line in body.splitlines()
    )


def format_api_error(error: Exception) -> str:
    """One-line message for any error; multi-line response bodies are folded."""
    return " ".join(str(error).split())
