from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arcade.cache import redis_manager
    redis_manager.init_app(flask_app)

    # Bearer token loader must be bound before any protected route runs
    import arcade.auth  # noqa: F401

    from arcade.main import main
    flask_app.register_blueprint(main)

    from arcade.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api')

    from arcade.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @flask_app.errorhandler(500)
    def internal_error(exc):
        db.session.rollback()
        return jsonify({'success': False, 'message': '서버 오류가 발생했습니다.'}), 500

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from arcade.models import User
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            master = User(name='master', is_master=True)
            master.set_password('password')
            db.session.add(master)

            # Seed players
            users = ['player1', 'player2', 'player3']
            for u in users:
                user = User(name=u, avatar=f'https://api.dicebear.com/8.x/bottts/svg?seed={u}')
                user.set_password('password')
                db.session.add(user)

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
