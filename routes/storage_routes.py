from flask import Blueprint, abort, current_app, send_file

from services.errors import StorageError
from services.storage_service import PaperStorage

storage_bp = Blueprint("storage", __name__, url_prefix="/storage")


@storage_bp.route("/<bucket>/<path:path>")
def serve_object(bucket, path):
    if bucket != current_app.config["PAPERS_BUCKET"]:
        abort(404)

    try:
        full_path = PaperStorage(bucket).open_path(path)
    except StorageError:
        abort(404)
    if not full_path:
        abort(404)
    return send_file(full_path, mimetype="application/pdf")
