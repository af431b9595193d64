"""FinControl application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "fincontrol.blueprints.auth"
    yield "fincontrol.blueprints.transactions"


def create_app(config: str | BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config if isinstance(config, BaseConfig) else _resolve_config(config)()
    app.config.from_object(config_obj)
    app.config["FINCONTROL_CONFIG"] = config_obj
    app.json.ensure_ascii = False  # type: ignore[attr-defined]

    from .logging_config import setup_logging

    setup_logging(config_obj)

    from .errors import register_error_handlers

    register_error_handlers(app)
    _register_blueprints(app)

    # Import init_db lazily so importing the package does not build an engine.
    from .extensions import init_db

    init_db(app)

    from . import cli as _cli

    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
