"""Process entry point: resolve params, bind, serve until signalled.

Exit status is 0 after a signal-driven shutdown and 1 when startup fails
(unusable startup params or a socket that cannot be bound).
"""
from __future__ import annotations

import asyncio
import logging
import signal
import socket
import sys

import uvicorn

from diagnostic_server.api.main import create_app
from diagnostic_server.core.config import Settings, get_settings
from diagnostic_server.core.errors import DiagnosticServerError, ListenError
from diagnostic_server.core.logging import configure_logging
from diagnostic_server.models.state import ServerIdentity, new_server_identity
from diagnostic_server.services.params import resolve_startup_params

logger = logging.getLogger(__name__)


class DiagnosticServer(uvicorn.Server):
    """uvicorn server that logs the shutdown signal it receives."""

    def __init__(self, config: uvicorn.Config, base_path: str):
        super().__init__(config)
        self.base_path = base_path

    def handle_exit(self, sig: int, frame) -> None:
        if not self.should_exit:
            logger.info("%s for %s. Exiting...", signal.Signals(sig).name, self.base_path)
        super().handle_exit(sig, frame)


def bind_socket(settings: Settings) -> socket.socket:
    """Bind the listening TCP socket.

    Raises:
        ListenError: If the address cannot be bound.
    """
    family = socket.AF_INET6 if ":" in settings.host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((settings.host, settings.port))
    except OSError as exc:
        sock.close()
        raise ListenError(f"Could not listen on {settings.host}:{settings.port}: {exc}") from exc
    sock.set_inheritable(True)
    return sock


async def serve(settings: Settings, identity: ServerIdentity, ssm_client=None) -> None:
    """Resolve startup params, then serve requests until a shutdown signal."""
    params = await resolve_startup_params(settings, ssm_client)

    logger.info("Starting server on port %s...", settings.port)
    app = create_app(settings, identity, params)
    sock = bind_socket(settings)
    config = uvicorn.Config(
        app,
        log_config=None,
        access_log=False,
        lifespan="on",
        timeout_graceful_shutdown=settings.graceful_shutdown_timeout,
    )
    server = DiagnosticServer(config, settings.base_path)
    await server.serve(sockets=[sock])


def _exit_on_terminate(signum, frame) -> None:
    # uvicorn restores this handler and re-raises the signal once it has shut down.
    sys.exit(0)


# PUBLIC_INTERFACE
def main() -> int:
    """Run the diagnostic server and return the process exit status."""
    identity = new_server_identity()
    settings = get_settings()
    configure_logging(identity.server_id, settings.log_level)
    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, _exit_on_terminate)

    try:
        asyncio.run(serve(settings, identity))
    except DiagnosticServerError as exc:
        logger.exception("Error while starting up: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
