from flask import Flask, jsonify
from cfa_admin.config import Config
from cfa_admin.logging_config import init_logging

def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    init_logging(app)

    from cfa_admin.routes.auth_routes import auth_bp
    from cfa_admin.routes.admin_routes import admin_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")

    @app.route('/')
    def index():
        return jsonify({"service": "cfa-admin-console", "status": "ok"})
    return app
