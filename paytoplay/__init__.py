from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import random
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

    # Host-supplied randomness for draws; a fixed seed makes draws replayable
    seed = flask_app.config.get('LOTTERY_RANDOM_SEED')
    if seed is None or seed == '':
        flask_app.extensions['lottery_randomness'] = random.SystemRandom()
    else:
        flask_app.extensions['lottery_randomness'] = random.Random(seed)

    # Import and register blueprints here
    from paytoplay.main import main
    flask_app.register_blueprint(main)

    from paytoplay.api.lottery import lottery
    flask_app.register_blueprint(lottery, url_prefix='/api/lottery')

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from paytoplay.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    # Flask-Login user loader
    from paytoplay.models import Account

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Account, int(user_id))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('game-init')
    @click.option('--owner', required=True, help='Account id allowed to configure and reset the game.')
    @click.option('--password', default=None, help='Creates the owner account with this password if it does not exist.')
    def game_init_command(owner, password):
        """Creates the lottery game owned by OWNER."""
        from paytoplay.services.lottery import game as game_service
        with flask_app.app_context():
            existing = game_service.get_game()
            if existing is not None:
                print(f'A game already exists (owner: {existing.owner}).')
                return
            game = game_service.create_game(owner, owner_password=password)
            print(f'Game {game.id} created for {owner}.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(game_init_command)

    return flask_app
