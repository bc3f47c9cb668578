"""
Browser login via a one-shot local callback listener.

Flow:
1. Bind an HTTP listener on 127.0.0.1 with an ephemeral port
2. Open the browser at the studio's CLI login page, passing the callback URL
   and a random state token
3. The page redirects to /callback with the API key and workspace id
4. The first callback with a matching state is handed to the waiting thread
   through a single-slot queue; later callbacks are discarded
5. The listener shuts down as soon as a result arrives or the deadline passes
"""

import logging
import queue
import secrets
import threading
import webbrowser
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable, Optional
from urllib.parse import parse_qs, urlencode, urlparse

from .errors import LoginError, LoginTimeoutError

logger = logging.getLogger(__name__)

LOGIN_TIMEOUT = 300.0
CALLBACK_PATH = "/callback"

SUCCESS_PAGE = (
    b"<html><body><h2>hy is now authenticated.</h2>"
    b"<p>You can close this window and return to the terminal.</p></body></html>"
)
FAILURE_PAGE = b"<html><body><h2>Login failed.</h2><p>Return to the terminal for details.</p></body></html>"


@dataclass(frozen=True)
class CallbackResult:
    """What the browser handed back. Exactly one of api_key/error is set."""
    api_key: Optional[str] = None
    workspace_id: Optional[str] = None
    error: Optional[str] = None


class CallbackListener:
    """Local HTTP listener that accepts exactly one login callback."""

    def __init__(self, state: str, host: str = "127.0.0.1", port: int = 0):
        self.state = state
        self.host = host
        self.port = port
        self._slot: "queue.Queue[CallbackResult]" = queue.Queue(maxsize=1)
        self._server: Optional[HTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.host}:{self.port}{CALLBACK_PATH}"

    def deliver(self, result: CallbackResult) -> bool:
        """Hand a result to the waiting thread. Only the first one is kept."""
        try:
            self._slot.put_nowait(result)
        except queue.Full:
            logger.debug("Discarding duplicate login callback")
            return False
        return True

    def start(self) -> "CallbackListener":
        listener = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                parsed = urlparse(self.path)
                if parsed.path != CALLBACK_PATH:
                    self._respond(404, b"Not found")
                    return

                query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
                if query.get("state") != listener.state:
                    logger.debug("Ignoring login callback with mismatched state")
                    self._respond(400, b"State mismatch")
                    return

                if query.get("error"):
                    listener.deliver(CallbackResult(error=query["error"]))
                    self._respond(200, FAILURE_PAGE)
                    return

                listener.deliver(CallbackResult(
                    api_key=query.get("api_key", ""),
                    workspace_id=query.get("workspace_id", ""),
                ))
                self._respond(200, SUCCESS_PAGE)

            def _respond(self, status: int, body: bytes):
                self.send_response(status)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, format, *args):
                logger.debug("callback listener: " + format, *args)

        self._server = HTTPServer((self.host, self.port), Handler)
        self.port = self._server.server_address[1]
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            kwargs={"poll_interval": 0.2},
            name="hy-login-callback",
            daemon=True,
        )
        self._thread.start()
        logger.debug(f"Login callback listener on {self.redirect_uri}")
        return self

    def wait(self, timeout: float = LOGIN_TIMEOUT) -> CallbackResult:
        """Block until the first callback or the deadline."""
        try:
            return self._slot.get(timeout=timeout)
        except queue.Empty:
            raise LoginTimeoutError(timeout)

    def shutdown(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None
        logger.debug("Login callback listener stopped")

    def __enter__(self) -> "CallbackListener":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.shutdown()


def web_origin(api_url: str) -> str:
    """Studio web address for an API URL: https://x/api -> https://x."""
    url = api_url.rstrip("/")
    if url.endswith("/api"):
        url = url[: -len("/api")]
    return url


def login_url(api_url: str, redirect_uri: str, state: str) -> str:
    query = urlencode({"redirect_uri": redirect_uri, "state": state})
    return f"{web_origin(api_url)}/cli/login?{query}"


def browser_login(
    api_url: str,
    timeout: float = LOGIN_TIMEOUT,
    open_browser: Callable[[str], bool] = webbrowser.open,
    on_url: Optional[Callable[[str, bool], None]] = None,
) -> CallbackResult:
    """
    Run the browser login flow and return the credential it produced.

    Args:
        api_url: API base URL; the login page lives on the same origin
        timeout: Seconds to wait for the callback
        open_browser: Launches the browser; returns False if it could not
        on_url: Called with (url, opened) so the caller can show the URL

    Raises:
        LoginTimeoutError: no callback before the deadline
        LoginError: the page reported an error or returned no key
    """
    state = secrets.token_urlsafe(16)

    with CallbackListener(state) as listener:
        url = login_url(api_url, listener.redirect_uri, state)
        try:
            opened = bool(open_browser(url))
        except webbrowser.Error as e:
            logger.debug(f"Could not launch browser: {e}")
            opened = False
        if on_url is not None:
            on_url(url, opened)

        result = listener.wait(timeout)

    if result.error:
        raise LoginError(f"login failed: {result.error}")
    if not result.api_key:
        raise LoginError("login failed: no API key returned")
    return result
