"""Routes package - Blueprint registration."""
from jelly.routes.main import main_bp
from jelly.routes.auth import auth_bp
from jelly.routes.articles import articles_bp
from jelly.routes.admin import admin_bp
from jelly.routes.content import content_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(articles_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(content_bp)
