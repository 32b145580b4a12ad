import logging
import signal
import sys
import threading
from http.server import ThreadingHTTPServer
from typing import Optional

from api.badge import Services, build_services, handler
from core.config import Settings, load_settings

logger = logging.getLogger(__name__)


class BadgeServer(ThreadingHTTPServer):
    """One thread per request; server_close() waits for in-flight requests."""
    daemon_threads = False
    block_on_close = True

    def __init__(self, address, services: Services):
        self.services = services
        super().__init__(address, handler)


def create_server(settings: Settings, services: Optional[Services] = None) -> BadgeServer:
    if services is None:
        services = build_services(settings)
    return BadgeServer((settings.host, settings.port), services)


def serve(server: BadgeServer) -> None:
    """Serve until SIGINT/SIGTERM, then stop accepting and drain."""
    def _stop(signum, frame):
        # shutdown() blocks until serve_forever returns, so not from this thread
        threading.Thread(target=server.shutdown, daemon=True).start()

    signal.signal(signal.SIGTERM, _stop)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    logger.info("HTTP service shutdown successfully...")


def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if not settings.github_token:
        logger.warning("GITHUB_TOKEN is not set; GitHub badges will report an auth error.")

    server = create_server(settings)
    logger.info(f"HTTP service listening on port {settings.port}...")
    serve(server)


if __name__ == "__main__":
    main()
