from flask import Blueprint, request, jsonify

from services import admin_service
from services.policy_service import MANAGE_CATALOG, MANAGE_PAPERS
from utils.decorators import capability_required

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


def _payload():
    return request.get_json(silent=True) or request.form


# =========================================================
# BRANCHES
# =========================================================
@admin_bp.route("/branches", methods=["GET"])
@capability_required(MANAGE_CATALOG)
def list_branches():
    return jsonify({
        "branches": [b.to_dict() for b in admin_service.list_branches()]
    })


@admin_bp.route("/branches", methods=["POST"])
@capability_required(MANAGE_CATALOG)
def create_branch():
    branch = admin_service.create_branch(_payload())
    return jsonify({
        "status": "success",
        "message": "Branch has been added successfully",
        "branch": branch.to_dict()
    }), 201


@admin_bp.route("/branches/<int:branch_id>", methods=["PUT"])
@capability_required(MANAGE_CATALOG)
def update_branch(branch_id):
    branch = admin_service.update_branch(branch_id, _payload())
    return jsonify({
        "status": "success",
        "message": "Branch has been updated successfully",
        "branch": branch.to_dict()
    })


@admin_bp.route("/branches/<int:branch_id>", methods=["DELETE"])
@capability_required(MANAGE_CATALOG)
def delete_branch(branch_id):
    admin_service.delete_branch(branch_id)
    return jsonify({
        "status": "success",
        "message": "Branch has been deleted successfully from the database",
        "id": branch_id
    })


# =========================================================
# SEMESTERS
# =========================================================
@admin_bp.route("/branches/<int:branch_id>/semesters", methods=["GET"])
@capability_required(MANAGE_CATALOG)
def list_semesters(branch_id):
    return jsonify({
        "semesters": [s.to_dict() for s in admin_service.list_semesters(branch_id)]
    })


@admin_bp.route("/semesters", methods=["POST"])
@capability_required(MANAGE_CATALOG)
def create_semester():
    semester = admin_service.create_semester(_payload())
    return jsonify({
        "status": "success",
        "message": "Semester has been added successfully",
        "semester": semester.to_dict()
    }), 201


@admin_bp.route("/semesters/<int:semester_id>", methods=["DELETE"])
@capability_required(MANAGE_CATALOG)
def delete_semester(semester_id):
    admin_service.delete_semester(semester_id)
    return jsonify({
        "status": "success",
        "message": "Semester has been deleted successfully from the database",
        "id": semester_id
    })


# =========================================================
# PAPERS
# =========================================================
@admin_bp.route("/papers", methods=["GET"])
@capability_required(MANAGE_PAPERS)
def list_papers():
    papers = admin_service.list_papers(
        branch_id=request.args.get("branch_id", type=int),
        semester_id=request.args.get("semester_id", type=int)
    )
    return jsonify({"papers": [p.to_dict() for p in papers]})


@admin_bp.route("/papers/<int:paper_id>", methods=["DELETE"])
@capability_required(MANAGE_PAPERS)
def delete_paper(paper_id):
    admin_service.delete_paper(paper_id)
    return jsonify({
        "status": "success",
        "message": "Paper has been deleted",
        "id": paper_id
    })
