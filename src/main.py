"""Entry point: python -m src.main [--host HOST] [--port PORT]"""

import argparse
import logging

import uvicorn

from src.api.app import create_app
from src.core.config import Settings
from src.core.log_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snake leaderboard server")
    parser.add_argument("--host", default=settings.host, help="interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="port to listen on")
    return parser.parse_args()


def main() -> None:
    settings = Settings.from_env()
    args = parse_args(settings)
    configure_logging(settings.log_level)

    app = create_app(settings)
    logger.info("Server listening on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
