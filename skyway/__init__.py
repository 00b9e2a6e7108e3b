import logging
from flask import Flask
from flask_cors import CORS
from skyway.extensions import db, migrate, jwt
from config import Config



def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    CORS(app) # Enable CORS for all routes

    # Make sure every model is registered before create_all / migrations
    from skyway import models  # noqa: F401

    # Register Blueprints
    from skyway.api import register_blueprints
    register_blueprints(app)

    from skyway.db_init.cli import register_commands
    register_commands(app)

    return app
