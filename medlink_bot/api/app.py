"""
FastAPI application factory and configuration.
"""

from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings, get_settings
from ..services.booking import BookingRepository
from ..services.conversation import ConversationService
from ..services.memory import InMemorySessionStore, SessionStore, SQLiteSessionStore
from ..services.whatsapp import WhatsAppCloudClient
from ..utils.event_log import set_log_path
from ..utils.logging import configure_logging, get_logger
from .middleware import SecurityHeaders, LoggingMiddleware
from .webhooks import WhatsAppWebhook
from .handlers import DiagnosticsHandler, HealthHandler

logger = get_logger("medlink.app")


def build_session_store(settings: Settings) -> SessionStore:
    """Create the session store selected by SESSION_BACKEND."""
    if settings.session_backend == "sqlite":
        return SQLiteSessionStore(settings.database(), ttl_seconds=settings.session_ttl_seconds)
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)


def create_app(
    settings: Optional[Settings] = None,
    *,
    repository: Optional[BookingRepository] = None,
    whatsapp: Optional[WhatsAppCloudClient] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Collaborators are built from ``settings`` unless passed in.
    Raises ConfigurationError when required settings are missing.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    settings.ensure_required()
    if settings.event_log_path:
        set_log_path(settings.event_log_path)

    if repository is None:
        repository = BookingRepository(settings.database())
    if whatsapp is None:
        whatsapp = WhatsAppCloudClient(settings.whatsapp())
    if session_store is None:
        session_store = build_session_store(settings)

    conversation = ConversationService(
        repository,
        whatsapp,
        session_store,
        hospital_menu_limit=settings.hospital_menu_limit,
        reprompt_while_awaiting=settings.reprompt_while_awaiting,
    )

    app = FastAPI(
        title=settings.app_name,
        description="WhatsApp bot for booking hospital beds",
        version=settings.app_version,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    health_handler = HealthHandler(settings, repository)
    whatsapp_webhook = WhatsAppWebhook(settings, conversation)

    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(whatsapp_webhook.router, prefix="/webhook", tags=["webhooks"])

    if settings.debug:
        diagnostics = DiagnosticsHandler(whatsapp, repository, settings.hospital_menu_limit)
        app.include_router(diagnostics.router, prefix="/diagnostics", tags=["diagnostics"])

    app.state.conversation = conversation
    logger.info("Medlink bot ready (sessions=%s)", settings.session_backend)
    return app
