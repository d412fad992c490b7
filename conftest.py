import logging

import httpx
import pytest

from feed_relay.config import RelayConfig


@pytest.fixture
def relay_config():
    """Configuration pointing at a fake remote, never reached over the network."""
    return RelayConfig(
        listen_address="localhost:9092",
        target_url="https://example.test/feed",
        username="u",
        password="p",
    )


@pytest.fixture
def make_transport():
    """Build an httpx.MockTransport that records every outbound request."""

    def _make(handler):
        seen = []

        def _record(request: httpx.Request):
            seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(_record)
        transport.requests = seen
        return transport

    return _make


@pytest.fixture
def relay_logger():
    logger = logging.getLogger("feed_relay.test")
    logger.setLevel(logging.DEBUG)
    return logger
