import os

from flask import current_app, request, has_request_context
from werkzeug.utils import secure_filename

from services.errors import StorageError


class PaperStorage:
    """Object storage bucket kept as a folder on local disk."""

    def __init__(self, bucket, root=None, public_url=None):
        self.bucket = bucket
        self.root = root if root is not None else current_app.config["STORAGE_FOLDER"]
        self.public_url = public_url if public_url is not None else current_app.config.get("STORAGE_PUBLIC_URL", "")
        self.folder = os.path.join(self.root, bucket)

    def _resolve(self, path):
        name = secure_filename(path or "")
        if not name:
            raise StorageError("Invalid storage path")
        return name, os.path.join(self.folder, name)

    def upload(self, path, data):
        name, full_path = self._resolve(path)
        try:
            os.makedirs(self.folder, exist_ok=True)
        except OSError:
            current_app.logger.exception("Creating bucket %s failed", self.bucket)
            raise StorageError("File upload failed.")
        try:
            # "x" refuses to replace an existing object
            with open(full_path, "xb") as fh:
                fh.write(data)
        except FileExistsError:
            raise StorageError("The resource already exists")
        except OSError:
            current_app.logger.exception("Writing %s/%s failed", self.bucket, name)
            raise StorageError("File upload failed.")
        return name

    def get_public_url(self, path):
        name = secure_filename(path or "")
        base = self.public_url
        if not base and has_request_context():
            base = request.host_url
        return f"{base.rstrip('/')}/storage/{self.bucket}/{name}"

    def open_path(self, path):
        name, full_path = self._resolve(path)
        if not os.path.isfile(full_path):
            return None
        return full_path

    def remove(self, paths):
        removed = []
        for path in paths:
            if not path:
                continue
            try:
                _, full_path = self._resolve(path)
                os.remove(full_path)
                removed.append(path)
            except (OSError, StorageError) as exc:
                current_app.logger.warning("Could not remove %s/%s: %s", self.bucket, path, exc)
        return removed


def papers_bucket():
    return PaperStorage(current_app.config["PAPERS_BUCKET"])
