from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user

from services.errors import ExamVaultError
from services.policy_service import UPLOAD_PAPERS
from services.upload_service import upload_options, upload_paper
from utils.decorators import capability_required

upload_bp = Blueprint("upload", __name__, url_prefix="/upload")


@upload_bp.route("/options")
@capability_required(UPLOAD_PAPERS)
def options():
    return jsonify(upload_options(request.args.get("branch_id", type=int)))


@upload_bp.route("", methods=["POST"])
@capability_required(UPLOAD_PAPERS)
def upload():
    try:
        paper, target = upload_paper(
            current_user,
            request.form,
            request.files.get("file")
        )
    except ExamVaultError as e:
        current_app.logger.warning("Upload failed for %s: %s", current_user.email, e.message)
        return jsonify({
            "status": "error",
            "title": "Upload failed",
            "message": e.message
        }), e.status_code

    return jsonify({
        "status": "success",
        "message": "Your question paper has been uploaded successfully.",
        "paper": paper.to_dict(),
        "redirect": target
    }), 201
