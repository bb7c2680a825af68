import logging

from flask import Flask
from flask_cors import CORS

from core import config
from routes.scripture_api import scripture_bp, set_service
from utils.errors import not_found


def create_app(service=None) -> Flask:
    """
    Build the Flask app.

    Pass a ScriptureService to serve an already-loaded corpus; otherwise the
    configured corpus is loaded on the first request.
    """
    app = Flask(__name__)

    # Keep non-ASCII (en-dashes in canonical references) readable in JSON
    app.json.ensure_ascii = False

    CORS(app)

    if service is not None:
        set_service(service)

    # Register blueprints
    app.register_blueprint(scripture_bp)

    @app.errorhandler(404)
    def page_not_found(_e):
        return not_found(detail="The requested resource could not be found.")

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )
    create_app().run(host=config.API_HOST, port=config.API_PORT)
