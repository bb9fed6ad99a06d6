import logging
from typing import AsyncGenerator
from fastapi import FastAPI
from contextlib import asynccontextmanager

from auth.email import VerificationEmailSender
from auth.session import cookie_params_from_env
from database import create_engine, create_session_factory, init_models
from session import TokenLedger, LogoutLedger, ContextBuilder
from .config import (
    get_database_url,
    get_jwt_secret,
    get_ledger_retention_seconds,
    get_session_token_wait_seconds,
    get_verification_code_ttl_minutes,
)

logger = logging.getLogger("menu.service.lifecycle")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the process-wide collaborators and park them on app.state.

    The ledgers live exactly as long as the server process; the context
    builder and the session cookie middleware both receive the same instances.
    """
    jwt_secret = get_jwt_secret()

    engine = create_engine(get_database_url())
    await init_models(engine)
    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    retention = get_ledger_retention_seconds()
    token_ledger = TokenLedger(retention_seconds=retention)
    logout_ledger = LogoutLedger(retention_seconds=retention)
    app.state.token_ledger = token_ledger
    app.state.logout_ledger = logout_ledger
    app.state.context_builder = ContextBuilder(token_ledger, logout_ledger, jwt_secret)

    app.state.cookie_params = cookie_params_from_env()
    app.state.session_token_wait_seconds = get_session_token_wait_seconds()

    ttl_minutes = get_verification_code_ttl_minutes()
    app.state.verification_code_ttl_minutes = ttl_minutes
    email_sender = VerificationEmailSender(ttl_minutes=ttl_minutes)
    app.state.email_sender = email_sender

    logger.info("Digital menu service started")
    yield

    await email_sender.close()
    await engine.dispose()
    logger.info("Digital menu service stopped")
