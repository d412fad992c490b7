import logging
from typing import Optional

import httpx
from opentelemetry import trace

from feed_relay.config import RelayConfig
from feed_relay.errors import FetchError

MIME_RSS_XML = "application/rss+xml"

tracer = trace.get_tracer(__name__)
logger = logging.getLogger("uvicorn.error")


def _validate(config: RelayConfig) -> None:
    for name in ("target_url", "username", "password"):
        if not getattr(config, name):
            raise ValueError(f"{name} must not be empty")


async def fetch_remote(
    config: RelayConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    log: Optional[logging.Logger] = None,
) -> bytes:
    """
    GET the configured target URL with HTTP Basic credentials and return the
    whole response body.

    The remote status code is not interpreted: a non-2xx body is returned like
    any other, only a warning is logged. There is no timeout and no retry.

    Args:
        config: Relay configuration holding the target URL and credentials
        transport: Optional httpx transport, used to stub the remote in tests
        log: Logger for diagnostics, defaults to the server logger

    Raises:
        ValueError: if the target URL or a credential is empty
        FetchError: if the request cannot be executed or its body cannot be read
    """
    _validate(config)
    log = log or logger

    with tracer.start_as_current_span("fetch_remote") as span:
        span.set_attribute("relay.target_url", config.redacted_target_url)

        async with httpx.AsyncClient(
            auth=httpx.BasicAuth(config.username, config.password),
            timeout=httpx.Timeout(None),
            follow_redirects=True,
            transport=transport,
        ) as client:
            try:
                request = client.build_request("GET", config.target_url)
                response = await client.send(request, stream=True)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise FetchError("unable to execute request", e) from e

            try:
                span.set_attribute("relay.status_code", response.status_code)
                if response.is_error:
                    log.warning(
                        f"[Feed] Remote answered {response.status_code}, relaying body anyway"
                    )
                try:
                    body = await response.aread()
                except (httpx.HTTPError, httpx.StreamError) as e:
                    raise FetchError("unable to read body", e) from e
            finally:
                await response.aclose()

        log.debug(f"[Feed] Fetched {len(body)} bytes from {config.redacted_target_url}")
        return body
