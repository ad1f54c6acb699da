import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamsync.config import Settings, get_settings
from streamsync.routes.analytics import router as analytics_router
from streamsync.routes.dashboard import APP_VERSION
from streamsync.routes.dashboard import router as dashboard_router
from streamsync.routes.hosts import router as hosts_router
from streamsync.routes.navigation import router as navigation_router
from streamsync.routes.sessions import router as sessions_router
from streamsync.services.app_state import AppState
from streamsync.services.gemini_report import GeminiSummarizer, ReportRequestor, Summarizer
from streamsync.services.record_store import RecordStore
from streamsync.services.seed_data import build_seed_sessions, seed_hosts

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    summarizer: Summarizer | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    application = FastAPI(
        title="StreamSync Live-Commerce Dashboard API",
        version=APP_VERSION,
        description="Revenue, duration and host performance across the live-streaming sales accounts.",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.dashboard = AppState(
        settings=settings,
        store=RecordStore(hosts=seed_hosts(), sessions=build_seed_sessions()),
        report_requestor=ReportRequestor(summarizer or GeminiSummarizer(settings)),
    )
    logger.info(
        "Record store seeded: %d hosts, %d sessions",
        len(application.state.dashboard.store.hosts),
        len(application.state.dashboard.store.sessions),
    )

    application.include_router(dashboard_router)
    application.include_router(analytics_router)
    application.include_router(hosts_router)
    application.include_router(sessions_router)
    application.include_router(navigation_router)

    return application


app = create_app()
