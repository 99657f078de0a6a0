import logging

from flask import Blueprint, request, session, jsonify, g
from cfa_admin.services.api_client import ApiError
from cfa_admin.services.auth_service import authenticate_admin
from cfa_admin.utils.session import current_api_session

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

@auth_bp.before_app_request
def load_logged_in_user():
    if "auth_token" not in session:
        g.user = None
    else:
        g.user = {
            "username": session.get("username"),
            "role": session.get("role")
        }

@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    username = data.get("username")
    password = data.get("password")

    try:
        result = authenticate_admin(current_api_session(), username, password)
    except ApiError as e:
        logger.error("Login failed for %s: %s", username, e.message)
        return jsonify({"success": False, "message": e.message}), 502

    if not result:
        return jsonify({"success": False, "message": "Invalid username or password"}), 401

    # --- SESSION SETUP ---
    user = result["user"]
    session.clear()
    session["auth_token"] = result["token"]
    session["username"] = user.get("username", username)
    session["role"] = user.get("role", "admin")

    logger.info("Admin %s logged in", session["username"])
    return jsonify({"success": True, "user": user})

@auth_bp.route("/logout", methods=["POST"])
def logout():
    session.clear()
    return jsonify({"success": True, "message": "Logged out successfully"})
