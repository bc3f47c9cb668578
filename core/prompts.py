"""
Interactive prompts: destructive-action confirmation and the chat loop.

Both are single-threaded and line-buffered. Nothing here has a timeout; a
read blocks until a line or EOF arrives.
"""

import logging
from typing import Callable, Optional, TextIO

import click

from .errors import HyError

logger = logging.getLogger(__name__)

AFFIRMATIVE = {"y", "yes"}
EXIT_TOKENS = {"exit", "quit"}


def _stdin() -> TextIO:
    return click.get_text_stream("stdin")


def confirm(prompt_text: str, stream: Optional[TextIO] = None) -> bool:
    """
    Ask a yes/no question; the default answer is No.

    Only "y" or "yes" (any case) confirm. Empty input and EOF decline.
    """
    click.echo(f"{prompt_text} [y/N] ", nl=False)
    line = (stream or _stdin()).readline()
    if not line:
        click.echo()
        return False
    return line.strip().lower() in AFFIRMATIVE


class ChatLoop:
    """
    Read-send-print loop for `hy thread chat` without a message.

    Args:
        send: Sends one message and returns the rendered reply. Blocks for the
            full round trip.
        stream: Where lines are read from (stdin by default)
        prompt: Printed before every read
    """

    def __init__(
        self,
        send: Callable[[str], str],
        stream: Optional[TextIO] = None,
        prompt: str = "You: ",
    ):
        self.send = send
        self.stream = stream
        self.prompt = prompt
        self.sent = 0

    def run(self) -> int:
        """Run until an exit token or EOF. Returns the number of messages sent."""
        stream = self.stream or _stdin()

        while True:
            click.echo(self.prompt, nl=False)
            line = stream.readline()
            if not line:
                click.echo()
                break

            message = line.strip()
            if not message:
                continue

            if message in EXIT_TOKENS:
                click.echo("Goodbye!")
                break

            click.echo("Thinking...")
            try:
                reply = self.send(message)
            except HyError as e:
                logger.debug(f"Chat message failed: {e}")
                click.echo(f"Error: {e}")
            else:
                self.sent += 1
                click.echo()
                click.echo(reply)
            click.echo()

        return self.sent
