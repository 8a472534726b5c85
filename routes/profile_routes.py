from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from services.policy_service import EDIT_PROFILE
from services.profile_service import get_or_create_profile, update_profile
from utils.decorators import capability_required

profile_bp = Blueprint("profile", __name__, url_prefix="/profile")


def _profile_dict(profile):
    data = profile.to_dict()
    data["email"] = data["email"] or current_user.email
    return data


@profile_bp.route("", methods=["GET"])
@login_required
def show_profile():
    return jsonify({"profile": _profile_dict(get_or_create_profile(current_user))})


@profile_bp.route("", methods=["PUT"])
@capability_required(EDIT_PROFILE)
def edit_profile():
    data = request.get_json(silent=True) or request.form
    profile = update_profile(current_user, data)
    return jsonify({
        "status": "success",
        "message": "Your profile has been updated successfully.",
        "profile": _profile_dict(profile)
    })
