from flask import Blueprint, request, jsonify, session, current_app
from flask_login import login_user, logout_user, current_user

from services.auth_service import authenticate_user, register_user

auth_bp = Blueprint("auth", __name__)


def _payload():
    return request.get_json(silent=True) or request.form


def session_state():
    if current_user.is_authenticated:
        return {"authenticated": True, "user": current_user.to_dict()}
    return {"authenticated": False, "user": None}


# =========================================================
# LOGIN ROUTE
# =========================================================
@auth_bp.route("/login", methods=["POST"])
def login():
    data = _payload()
    user = authenticate_user(data.get("email"), data.get("password"))

    login_user(user)
    current_app.logger.info("Login successful for %s", user.email)

    return jsonify({
        "status": "success",
        "message": "You have been logged in successfully.",
        "redirect": "/",
        **session_state()
    })


# =========================================================
# REGISTER ROUTE
# =========================================================
@auth_bp.route("/register", methods=["POST"])
def register():
    data = _payload()
    user = register_user(
        data.get("email"),
        data.get("password"),
        full_name=data.get("full_name")
    )
    login_user(user)

    return jsonify({
        "status": "success",
        "message": "Your account has been created.",
        "redirect": "/",
        **session_state()
    }), 201


# =========================================================
# LOGOUT ROUTE
# =========================================================
@auth_bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    session.clear()
    return jsonify({
        "status": "success",
        "message": "You have been logged out.",
        "redirect": "/"
    })


# =========================================================
# CURRENT SESSION
# =========================================================
@auth_bp.route("/session")
def current_session():
    return jsonify(session_state())
