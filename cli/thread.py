"""Thread commands - chat with the production AI"""

import click

from core.models import ChatReply, ThreadHistory
from core.prompts import ChatLoop
from core.renderer import render_chat_reply, render_history
from .common import pass_hy

THREAD_PATH = "/workspaces/{workspace_id}/thread"
PRODUCTION_THREAD_PATH = "/workspaces/{workspace_id}/productions/{production_id}/thread"


def _thread_path(production_id):
    if production_id:
        return PRODUCTION_THREAD_PATH, {"production_id": production_id}
    return THREAD_PATH, {}


@click.group(name="thread")
def thread_cmd():
    """Chat with the AI about your workspace or a production"""
    pass


@thread_cmd.command("chat")
@click.argument("message", nargs=-1)
@click.option("--production", "-p", "production_id", help="Scope the thread to a production")
@pass_hy
def chat(hy, message, production_id):
    """Send a message, or start an interactive chat when none is given

    \b
    Examples:
      hy thread chat "Make the intro shorter" -p prod_abc123
      hy thread chat
    """
    path, path_params = _thread_path(production_id)

    with hy.client() as client:
        def send(content: str) -> str:
            data = client.call("POST", path, path_params=path_params, body={"message": content})
            return render_chat_reply(ChatReply.from_dict(data))

        text = " ".join(message).strip()
        if text:
            click.echo("Thinking...")
            click.echo()
            click.echo(send(text))
            return

        scope = f"production {production_id}" if production_id else "workspace"
        click.echo(f"Chatting about {scope}. Type 'exit' or 'quit' to leave.")
        click.echo()
        ChatLoop(send).run()


@thread_cmd.command("history")
@click.option("--production", "-p", "production_id", help="Show the thread of a production")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True,
              help="Maximum number of messages")
@pass_hy
def history(hy, production_id, limit):
    """Show thread messages"""
    path, path_params = _thread_path(production_id)

    with hy.client() as client:
        data = client.call("GET", path, path_params=path_params, params=[("limit", limit)])

    click.echo(render_history(ThreadHistory.from_dict(data)))
