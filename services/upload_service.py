import os
import uuid

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from config.config import MAX_UPLOAD_BYTES
from extensions import db
from models import Branch, Semester, Paper
from services.errors import ValidationError, NotFoundError, ExamVaultError
from services.storage_service import papers_bucket

PDF_MIME_TYPES = {"application/pdf", "application/x-pdf", ""}


def is_pdf(filename, mimetype):
    # Some mobile browsers report no MIME type at all
    return (
        (mimetype or "") in PDF_MIME_TYPES
        or (filename or "").lower().endswith(".pdf")
    )


def file_size(file):
    stream = file.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def validate_pdf(file, max_bytes=MAX_UPLOAD_BYTES):
    if file is None or not file.filename:
        raise ValidationError("Please upload a PDF file of the question paper.")

    if not is_pdf(file.filename, file.mimetype):
        raise ValidationError("Please upload a PDF file only.")

    if file_size(file) > max_bytes:
        raise ValidationError("File size must be less than 10MB.")

    return file


def storage_name(filename):
    """Fresh unique object name keeping the original extension."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "pdf"
    return f"{uuid.uuid4()}.{ext}"


def read_paper_form(form):
    fields = {
        key: (form.get(key) or "").strip()
        for key in ("title", "branch_id", "semester_id", "subject", "year", "description")
    }
    missing = [k for k in ("title", "branch_id", "semester_id", "subject", "year") if not fields[k]]
    if missing:
        raise ValidationError(f"Missing information: {', '.join(missing)}")
    try:
        fields["branch_id"] = int(fields["branch_id"])
        fields["semester_id"] = int(fields["semester_id"])
    except ValueError:
        raise ValidationError("Branch and semester must be selected")
    return fields


def resolve_target(branch_id, semester_id):
    branch = db.session.get(Branch, branch_id)
    if not branch:
        raise NotFoundError("Branch not found")
    semester = db.session.get(Semester, semester_id)
    if not semester or semester.branch_id != branch.branch_id:
        raise NotFoundError("Semester not found")
    return branch, semester


def upload_options(branch_id=None):
    branches = Branch.query.order_by(Branch.name).all()
    semesters = []
    if branch_id:
        semesters = (
            Semester.query
            .filter_by(branch_id=branch_id)
            .order_by(Semester.number)
            .all()
        )
    return {
        "branches": [b.to_dict() for b in branches],
        "semesters": [s.to_dict() for s in semesters],
    }


def upload_paper(user, form, file):
    """
    Store the PDF, then record the paper row pointing at its public URL.

    No row is written unless the storage upload succeeded. If the row
    cannot be written the stored object is removed again.
    """
    validate_pdf(file, current_app.config.get("MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))
    fields = read_paper_form(form)
    branch, semester = resolve_target(fields["branch_id"], fields["semester_id"])

    bucket = papers_bucket()
    path = bucket.upload(storage_name(file.filename), file.read())
    public_url = bucket.get_public_url(path)
    current_app.logger.info("Stored %s for %s", path, user.email)

    paper = Paper(
        title=fields["title"],
        subject=fields["subject"],
        year=fields["year"],
        description=fields["description"] or None,
        file_url=public_url,
        file_path=path,
        branch_id=branch.branch_id,
        semester_id=semester.semester_id,
        uploaded_by=user.user_id
    )
    try:
        db.session.add(paper)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        bucket.remove([path])
        current_app.logger.exception("Saving paper details failed")
        raise ExamVaultError("Failed to save paper details. Please try again.")

    return paper, f"/papers/{branch.code}/{semester.number}"
