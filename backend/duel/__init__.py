import random

import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config
from duel.errors import CatalogError
from duel.services.match import Lobby, ManualScheduler, SocketIOScheduler, load_catalog

socketio = SocketIO(async_mode=None)


def parse_origins(value):
    """'*' allows any origin; anything else is a comma separated list."""
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = parse_origins(flask_app.config.get('ALLOWED_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # A missing or malformed catalog is fatal: CatalogError propagates
    catalog = load_catalog(flask_app.config['CATALOG_PATH'])
    flask_app.logger.info(
        f"[catalog] path={flask_app.config['CATALOG_PATH']} cards={len(catalog)} "
        f"attributes={len(catalog.attributes)}"
    )

    # In tests round timers run on a virtual clock stepped by the test
    if flask_app.config.get('TESTING'):
        scheduler = ManualScheduler()
    else:
        scheduler = SocketIOScheduler(socketio)

    seed = flask_app.config.get('MATCH_SEED')
    flask_app.extensions['duel'] = Lobby(
        catalog,
        scheduler,
        send=_emit_to_participant,
        rng=random.Random(seed) if seed is not None else random.Random(),
        reveal_delay_ms=int(flask_app.config.get('REVEAL_DELAY_MS', 1500)),
        resolve_delay_ms=int(flask_app.config.get('RESOLVE_DELAY_MS', 2000)),
        logger=flask_app.logger,
    )

    from duel.main import main
    flask_app.register_blueprint(main)

    from duel.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('catalog-check')
    @click.argument('path', required=False)
    def catalog_check_command(path):
        """Validate a card catalog file (defaults to CATALOG_PATH)."""
        path = path or flask_app.config['CATALOG_PATH']
        try:
            checked = load_catalog(path)
        except CatalogError as exc:
            raise click.ClickException(str(exc))
        click.echo(f'{path}: {len(checked)} cards, {len(checked.attributes)} attributes')

    flask_app.cli.add_command(catalog_check_command)

    return flask_app


def _emit_to_participant(sid, event, payload):
    # Use socketio.emit since this may be called from a background task
    socketio.emit(event, payload, to=sid, namespace='/')
