from flask import Flask, jsonify, request
from config import Config
from database import close_db, init_db
from logging_config import setup_logging
from routes.ai_bp import ai_bp
from routes.blogs_bp import blogs_bp
from services.ai_service import AIService

#Here the blueprints are imported from other modules so they can be registered

logger = setup_logging(module_name="smart_blog")


def create_app(config_object=Config):
    """Creates the central application object. Tests pass their own config class."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    # AI pipeline built once per process; read-only afterwards
    app.extensions["ai_service"] = AIService.from_config(config_object)
    logger.info("AI features %s", "enabled" if app.extensions["ai_service"].is_available() else "disabled")

    """ Here we are registering blueprints
    Both live under /api: the AI writing tools and the blog CRUD that uses them
    for auto-tagging.
    """
    app.register_blueprint(ai_bp, url_prefix='/api/ai')
    app.register_blueprint(blogs_bp, url_prefix='/api/blogs')

    app.teardown_appcontext(close_db)

    @app.route('/api/health')
    def health():
        return jsonify({"status": "ok", "ai": app.extensions['ai_service'].is_available()})

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify({"message": "Route not found"}), 404
        return error

    @app.errorhandler(405)
    def method_not_allowed(error):
        if request.path.startswith('/api/'):
            return jsonify({"message": "Method not allowed"}), 405
        return error

    return app


if __name__ == '__main__':

    """
    Over here database is initialized and it
     Ensures the SQLite schema (blogs table) exists
     before the server starts accepting requests.
    """
    init_db(Config.DB_PATH)

    create_app().run(host="0.0.0.0")
