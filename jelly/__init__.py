"""
Jelly Magazine API - Application Factory
"""
import logging
import os

import click
from flask import Flask, current_app, request

from jelly.errors import register_error_handlers
from jelly.extensions import db, babel
from jelly.routes import register_blueprints
from jelly.services.auth import hash_password
from jelly.services.site_content import SiteContent
from jelly.settings import config
from jelly.storage import EXTENSION_KEY, build_storage
from jelly.storage.seed import seed_sample_data

logger = logging.getLogger(__name__)


def get_locale():
    """Determine the best locale for the user."""
    languages = current_app.config['LANGUAGES']
    lang = request.cookies.get('babel_translation')
    if lang in languages:
        return lang
    return request.accept_languages.best_match(languages)


def configure_logging(app):
    """Attach one stream handler to the package logger."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    package_logger = logging.getLogger('jelly')
    package_logger.setLevel(level)
    app.logger.setLevel(level)
    if not any(getattr(h, '_jelly', False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s %(name)s %(levelname)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        handler._jelly = True
        package_logger.addHandler(handler)


def create_app(config_name=None, storage=None, **overrides):
    """Application Factory.

    ``storage`` injects a ready-made backend; otherwise one is built from
    ``STORAGE_BACKEND``. ``overrides`` are applied on top of the config class.
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.config.update(overrides)

    configure_logging(app)

    # Initialize extensions
    if app.config['STORAGE_BACKEND'] == 'database':
        db.init_app(app)
    babel.init_app(app, locale_selector=get_locale)

    register_error_handlers(app)
    register_blueprints(app)
    register_cli_commands(app)

    app.extensions[EXTENSION_KEY] = storage if storage is not None else build_storage(app)

    with app.app_context():
        if app.config['STORAGE_BACKEND'] == 'database':
            db.create_all()
        prepare_storage(app)

    return app


def prepare_storage(app):
    """Seed demo data (when enabled) and the default site copy."""
    storage = app.extensions[EXTENSION_KEY]
    if app.config.get('SEED_SAMPLE_DATA'):
        seed_sample_data(storage, hash_password(app.config['SEED_OWNER_PASSWORD']))
    SiteContent(storage).seed_defaults_if_empty()
    logger.info("Storage ready (%s backend)", app.config['STORAGE_BACKEND'])


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        if app.config['STORAGE_BACKEND'] != 'database':
            raise click.ClickException("STORAGE_BACKEND is not 'database'; set DATABASE_URL first.")
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("seed")
    def seed_command():
        """Seeds demo users, articles and default site copy into an empty store."""
        storage = app.extensions[EXTENSION_KEY]
        created = seed_sample_data(storage, hash_password(app.config['SEED_OWNER_PASSWORD']))
        rows = SiteContent(storage).seed_defaults_if_empty()
        click.echo(f"Sample data {'created' if created else 'already present'}; {rows} content rows added.")
