from functools import wraps
from flask import jsonify, current_app
from flask_login import current_user

from services.policy_service import has_capability

LOGIN_PATH = "/login"
HOME_PATH = "/"


def login_redirect():
    return jsonify({
        "status": "error",
        "message": "Please log in to continue.",
        "redirect": LOGIN_PATH
    }), 401


def capability_required(capability):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # 1. Check if user is logged in
            if not current_user.is_authenticated:
                return login_redirect()

            # 2. Check the user's role grants the capability
            if not has_capability(current_user, capability):
                current_app.logger.warning(
                    "Access denied: %s lacks %s", current_user.email, capability
                )
                return jsonify({
                    "status": "error",
                    "message": "You don't have permission to access the admin panel.",
                    "redirect": HOME_PATH
                }), 403

            return func(*args, **kwargs)
        return wrapper
    return decorator
