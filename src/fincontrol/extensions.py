"""Database and service wiring for the Flask app."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelTransactionRepository, SQLModelUserRepository
from .services.auth import AuthService

EXTENSION_KEY = "fincontrol"


@dataclass
class AppServices:
    """Handles injected into request handlers; built once per app."""

    engine: Engine
    session_factory: SessionFactory
    users: SQLModelUserRepository
    transactions: SQLModelTransactionRepository
    auth: AuthService


def init_db(app: Flask) -> AppServices:
    """Create the engine, ensure the schema and attach services to the app."""

    config: BaseConfig = app.config["FINCONTROL_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)
    users = SQLModelUserRepository(session_factory)
    services = AppServices(
        engine=engine,
        session_factory=session_factory,
        users=users,
        transactions=SQLModelTransactionRepository(session_factory),
        auth=AuthService(
            users,
            secret_key=config.SECRET_KEY,
            token_ttl=config.TOKEN_TTL,
            algorithm=config.JWT_ALGORITHM,
        ),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> AppServices:
    """Return the services bound to the current Flask app."""

    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:  # pragma: no cover - create_app always wires them
        raise RuntimeError("Database engine not initialized")
    return services
