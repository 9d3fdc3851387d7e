"""
contact_relay - contact form submission relay
Main application entry point.
"""

import contextlib

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from contact_relay import __version__
from contact_relay.config import Settings, load_settings
from contact_relay.logger import configure_logging, logger
from contact_relay.providers import MailSender, RowStore, get_mail_sender, get_row_store
from contact_relay.routers import contact_router
from contact_relay.services import SubmissionHandler


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    # uvicorn の初期化後にもう一度設定する
    configure_logging()
    logger.info(
        "Starting up...",
        notification_email=app.state.settings.notification_email,
        row_store=app.state.settings.row_store,
        mail_sender=app.state.settings.mail_sender,
    )
    yield
    logger.info("Shutting down...")


def create_app(
    settings: Settings | None = None,
    row_store: RowStore | None = None,
    mail_sender: MailSender | None = None,
) -> FastAPI:
    """Build the application. Collaborators not passed in are built from settings."""
    settings = settings or load_settings()
    row_store = row_store or get_row_store(settings)
    mail_sender = mail_sender or get_mail_sender(settings)

    app = FastAPI(
        title="contact_relay",
        description="Contact form submission relay",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.submission_handler = SubmissionHandler(settings, row_store, mail_sender)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.include_router(contact_router)
    return app


app = create_app()
