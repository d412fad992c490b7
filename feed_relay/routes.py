import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from opentelemetry import trace

from feed_relay.config import RelayConfig
from feed_relay.errors import FetchError
from feed_relay.relay import MIME_RSS_XML, fetch_remote
from feed_relay.utils.exception_logging import (
    format_exception_message,
    log_exception_with_details,
)

ROOT_MARKER = "you shouldn't be here"
FETCH_FAILED_MESSAGE = "unable to fetch feed"

router = APIRouter()
tracer = trace.get_tracer(__name__)


def get_config(request: Request) -> RelayConfig:
    return request.app.state.config


def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


def get_transport(request: Request) -> Optional[httpx.AsyncBaseTransport]:
    return getattr(request.app.state, "transport", None)


@router.get("/", response_class=PlainTextResponse)
async def root():
    return PlainTextResponse(ROOT_MARKER)


@router.get("/feed")
async def feed(
    config: RelayConfig = Depends(get_config),
    logger: logging.Logger = Depends(get_logger),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
):
    with tracer.start_as_current_span("relay_feed") as span:
        try:
            body = await fetch_remote(config, transport=transport, log=logger)
        except FetchError as e:
            log_exception_with_details(logger, "[Feed] fetching feed failed:", e)
            span.set_attribute("relay.failed", True)
            span.set_attribute("relay.error", format_exception_message(e))
            return PlainTextResponse(FETCH_FAILED_MESSAGE, status_code=500)
        except Exception as e:
            log_exception_with_details(logger, "[Feed] unexpected relay failure:", e)
            span.set_attribute("relay.failed", True)
            span.set_attribute("relay.error", format_exception_message(e))
            return PlainTextResponse(FETCH_FAILED_MESSAGE, status_code=500)

        span.set_attribute("relay.bytes", len(body))
        return Response(content=body, media_type=MIME_RSS_XML)


@router.get("/ping")
async def ping():
    return JSONResponse({"message": "pong"})
