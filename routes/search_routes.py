from flask import Blueprint, request, jsonify

from services.search_service import search_papers

search_bp = Blueprint("search", __name__)


@search_bp.route("/search")
def search():
    query = request.args.get("q", "")
    results = search_papers(query)
    return jsonify({"query": query, "results": results, "count": len(results)})
