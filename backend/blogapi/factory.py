"""Application factory for the mock blog API."""

from __future__ import annotations

import logging

from flask import Flask

from blogapi.core.config import BaseConfig, get_config
from blogapi.core.logger import configure_logging, init_app as init_logging

log = logging.getLogger(__name__)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the blog API with fresh in-process stores.

    Start-up order: configuration (``APP_ENV`` unless ``config`` is given,
    then the optional instance file), JSON logging, proxy headers, JWT and
    the stores, seeding, CORS, the ``/api`` blueprints, error handlers and
    the ``flask seed`` commands.

    Parameters
    ----------
    config:
        Config class, object or import path; ``None`` resolves it from ``APP_ENV``.
    instance_relative_config:
        Load ``instance_config_filename`` from the instance folder when present.
    instance_config_filename:
        Instance override file name.

    Returns
    -------
    flask.Flask
        Application owning its own data store and refresh-token store.
        ``REFRESH_STORE=redis`` makes start-up fail when Redis does not
        answer a ping.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from blogapi.core import proxy

    proxy.init_app(app)

    # JWT manager, DataStore and the memory or redis refresh-token store
    from blogapi.core import extensions

    extensions.init_app(app)

    if app.config.get("SEED_ON_STARTUP"):
        _seed_store(app)

    init_logging(app)

    from blogapi.core import cors

    cors.init_app(app)

    from blogapi.api import init_app as init_api

    init_api(app)

    from blogapi.core import errors

    errors.init_app(app)

    from blogapi import cli as app_cli

    app_cli.init_app(app)

    return app


def _seed_store(app: Flask) -> None:
    """Fill the fresh data store with the deterministic fake dataset."""
    from blogapi.core.extensions import STORE_KEY
    from blogapi.seeds import seed_data

    summary = seed_data.run_all(
        app.extensions[STORE_KEY], random_seed=int(app.config["SEED_RANDOM_SEED"])
    )
    log.info("seed.startup", extra={"event": "seeded", "count": sum(summary.values())})
