"""
Command line entry point: prompt for credentials, then serve the relay.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

import uvicorn

from feed_relay.config import RelayConfig, parse_listen_address
from feed_relay.credentials import CredentialSource, TerminalCredentialSource
from feed_relay.errors import CredentialError
from feed_relay.server import create_app
from feed_relay.utils.exception_logging import log_exception_with_details
from feed_relay.utils.logging import configure_logging
from feed_relay.vars import DEFAULT_LISTEN_ADDRESS, LOG_LEVEL, POCKET_BASE_URL

logger = logging.getLogger("uvicorn.error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feed-relay",
        description="Relay your unread Pocket feed over a local HTTP endpoint.",
    )
    parser.add_argument(
        "--listen",
        "-listen",
        default=DEFAULT_LISTEN_ADDRESS,
        help="address to listen on (default: %(default)s)",
    )
    return parser


def read_config(
    listen_address: str, credential_source: CredentialSource
) -> RelayConfig:
    try:
        credentials = credential_source.read_credentials()
    except CredentialError:
        raise
    except Exception as e:
        raise CredentialError("unable to read credentials", e) from e
    if not credentials.username:
        raise CredentialError("unable to read credentials: empty username")
    if not credentials.password:
        raise CredentialError("unable to read credentials: empty password")
    return RelayConfig.from_credentials(
        listen_address,
        credentials.username,
        credentials.password,
        base_url=POCKET_BASE_URL,
    )


def run(
    argv: Optional[List[str]] = None,
    credential_source: Optional[CredentialSource] = None,
    serve: Callable[..., None] = uvicorn.run,
) -> None:
    """
    Start the relay and block until the server stops.

    Raises:
        CredentialError: if the credentials cannot be read
        ValueError: if the listen address or log level is invalid
    """
    configure_logging(LOG_LEVEL)
    args = build_parser().parse_args(argv)
    host, port = parse_listen_address(args.listen)

    config = read_config(args.listen, credential_source or TerminalCredentialSource())
    app = create_app(config, logger=logger)

    logger.info(f"[Startup] Serving feed relay on {host}:{port}")
    serve(app, host=host, port=port, log_level=LOG_LEVEL.lower())


def main(argv: Optional[List[str]] = None) -> int:
    try:
        run(argv)
    except (CredentialError, ValueError) as e:
        log_exception_with_details(logger, "[Startup] aborting:", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
