"""
Word Game Application Package

Guess evaluation and game-state engine for a Wordle-style puzzle with
5, 6 and 7 letter rounds, plus a thin HTTP layer for the browser client.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.
    
    Args:
        config_class: Configuration class to use
        
    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    CORS(app)
    
    # Register blueprints
    from .controllers.game_controller import game_bp
    
    app.register_blueprint(game_bp, url_prefix='/api')
    
    return app
