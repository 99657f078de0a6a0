from functools import wraps
from flask import session, jsonify

def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if "auth_token" not in session:
            return jsonify({"success": False, "message": "Login required"}), 401
        return view(*args, **kwargs)
    return wrapped


def role_required(*roles):
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if "role" not in session:
                return jsonify({"success": False, "message": "Login required"}), 401

            if session.get("role") not in roles:
                return jsonify({"success": False, "message": "Forbidden"}), 403

            return view(*args, **kwargs)
        return wrapped
    return decorator
