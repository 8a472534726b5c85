from flask import Blueprint, jsonify, redirect, request, url_for

from services.errors import NotFoundError
from services.paper_service import get_paper, paper_view

viewer_bp = Blueprint("viewer", __name__, url_prefix="/view")


def not_found(message):
    return jsonify({"status": "not_found", "message": message, "home": "/"}), 404


@viewer_bp.route("/<int:paper_id>")
def view_paper(paper_id):
    try:
        paper = get_paper(paper_id)
    except NotFoundError as e:
        return not_found(e.message)

    return jsonify(paper_view(
        paper,
        page_url=request.base_url,
        download_url=url_for("viewer.download_paper", paper_id=paper_id)
    ))


@viewer_bp.route("/<int:paper_id>/download")
def download_paper(paper_id):
    try:
        paper = get_paper(paper_id)
    except NotFoundError as e:
        return not_found(e.message)

    if not paper.file_url:
        return not_found("No file is available for this paper.")
    return redirect(paper.file_url)
