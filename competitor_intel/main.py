from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from competitor_intel import __version__
from competitor_intel.config import get_ad_library_settings, get_renderer_settings, load_env_files


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _report_collaborators() -> None:
    """
    Log which external collaborators are configured.

    Missing credentials do not stop startup: discovery fails per request with a
    clear error and deep analysis falls back to the passive text extractor.
    """

    log = logging.getLogger(__name__)
    if not get_ad_library_settings().api_token:
        log.warning("APIFY_API_TOKEN is not set; /competitor-search will return 502.")
    if get_renderer_settings().enabled:
        log.info("Interactive renderer enabled; text extractor is the fallback source.")
    else:
        log.warning("BROWSERLESS_API_KEY is not set; deep analysis uses the text extractor only.")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()
    _report_collaborators()

    application = FastAPI(
        title="Competitor Intelligence API",
        version=__version__,
    )

    from competitor_intel.api.routers import competitor_intel_router

    application.include_router(competitor_intel_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return application


app = create_app()
