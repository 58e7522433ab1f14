import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from govdata.api.router import api_router
from govdata.config import settings
from govdata.services.aggregator import TransactionAggregator


def _setup_logging() -> None:
    """Configure application logging."""
    log_format = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
    date_format = "%H:%M:%S"
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # third-party libraries at WARNING, application loggers in detail
    logging.getLogger().setLevel(logging.WARNING)
    logging.getLogger("govdata").setLevel(level)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


_setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # one aggregator per process so the rate limiter is shared
    app.state.aggregator = TransactionAggregator()
    yield


app = FastAPI(
    title="National Transaction Data",
    description="Israeli real-estate transactions from government sources, with market statistics.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")
