import os
from flask import Flask, jsonify
from flask_cors import CORS
from config import config

from riddlebox.extensions import db


def create_app(config_name=None):
    app = Flask(__name__)

    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    cfg = config[config_name]
    app.config.from_object(cfg)
    cfg.init_app(app)

    # Load and sanitize database URL
    uri = app.config.get("SQLALCHEMY_DATABASE_URI") or os.environ.get("DATABASE_URL", "")
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    app.config["SQLALCHEMY_DATABASE_URI"] = uri or "sqlite:///local.db"
    app.secret_key = app.config.get("SECRET_KEY")

    # Extensions
    db.init_app(app)
    CORS(app, supports_credentials=True)

    # Blueprints
    from riddlebox.puzzles import create_puzzles_bp, init_pipeline
    app.register_blueprint(create_puzzles_bp(), url_prefix="/api")

    with app.app_context():
        from riddlebox.puzzles import models as _puzzle_models  # noqa: F401
        db.create_all()
        init_pipeline(app)

    @app.route("/healthz")
    def healthz():
        return jsonify({"ok": True})

    return app
