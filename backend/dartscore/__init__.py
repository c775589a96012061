from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def _cors_origins(flask_app):
    origins = flask_app.config.get('CORS_ORIGINS') or '*'
    if origins == ['*']:
        return '*'
    return origins

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _cors_origins(flask_app)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from dartscore.main import main
    flask_app.register_blueprint(main)

    from dartscore.api.users import users
    flask_app.register_blueprint(users, url_prefix='/api/users')

    from dartscore.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from dartscore.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @flask_app.errorhandler(404)
    def not_found(_error):
        return jsonify({'error': 'Not found'}), 404

    @flask_app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({'error': 'Method not allowed'}), 405

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from dartscore.models import User
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            for name in ['Alice', 'Bob', 'Charlie']:
                db.session.add(User(name=name))

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
