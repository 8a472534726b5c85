from flask import Blueprint, request, jsonify

from services.catalog_service import (
    catalog_summary, list_branch_cards, list_semester_cards, list_semester_papers
)

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.route("/")
def home():
    return jsonify({
        "title": "Your College Question Paper Repository",
        "stats": catalog_summary(),
        "links": {"browse": "/branches", "search": "/search"}
    })


@catalog_bp.route("/branches")
def branches():
    cards = list_branch_cards(request.args.get("q"))
    return jsonify({"branches": cards, "count": len(cards)})


@catalog_bp.route("/semester/<branch_code>")
def semesters(branch_code):
    branch, cards = list_semester_cards(branch_code)
    return jsonify({
        "branch_name": branch.name,
        "branch_code": branch.code,
        "semesters": cards
    })


@catalog_bp.route("/papers/<branch_code>/<semester_number>")
def papers(branch_code, semester_number):
    result = list_semester_papers(
        branch_code,
        semester_number,
        text=request.args.get("q"),
        year=request.args.get("year"),
        subject=request.args.get("subject")
    )
    result["count"] = len(result["papers"])
    return jsonify(result)
