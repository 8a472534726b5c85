import logging
import os
from logging.handlers import RotatingFileHandler

import click
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from config.config import Config
from extensions import db, login_manager, migrate

# Route Imports
from routes.auth_routes import auth_bp
from routes.catalog_routes import catalog_bp
from routes.search_routes import search_bp
from routes.viewer_routes import viewer_bp
from routes.upload_routes import upload_bp
from routes.admin_routes import admin_bp
from routes.profile_routes import profile_bp
from routes.storage_routes import storage_bp

# Model imports register the tables with SQLAlchemy
import models  # noqa: F401
from services.auth_service import load_session_user
from services.errors import ExamVaultError
from utils.decorators import login_redirect
from utils.seed_data import run_seed, create_admin


def configure_logging(app):
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    log_dir = app.config.get("LOG_DIR")
    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, "examvault.log"),
        maxBytes=2_000_000,
        backupCount=5
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
    ))
    app.logger.addHandler(handler)


def register_error_handlers(app):
    @app.errorhandler(ExamVaultError)
    def handle_examvault_error(e):
        if e.status_code >= 500:
            app.logger.error("Request failed: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        db.session.rollback()
        app.logger.exception("Database error")
        return jsonify({
            "status": "error",
            "message": "Something went wrong. Please try again."
        }), 500

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"status": "not_found", "message": "Page not found", "home": "/"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"status": "error", "message": "Method not allowed"}), 405

    @app.errorhandler(413)
    def handle_too_large(e):
        return jsonify({"status": "error", "message": "File size must be less than 10MB."}), 413


def register_commands(app):
    @app.cli.command("seed")
    def seed_command():
        """Create the roles and sample branches."""
        run_seed()
        click.echo("Seed data loaded")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    def create_admin_command(email, password):
        """Create or promote an admin account."""
        user = create_admin(email, password)
        click.echo(f"Admin ready: {user.email}")


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return load_session_user(user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return login_redirect()

    # Register Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(viewer_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(storage_bp)

    register_error_handlers(app)
    register_commands(app)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
