"""
Catalog administration: branches, semesters and papers.

Cascading deletes run inside a single transaction. A failure in any
step rolls back every step, so no parent disappears while children are
left behind and no children disappear while the parent stays.
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models import Branch, Semester, Paper
from services.errors import ValidationError, NotFoundError, ConflictError, ExamVaultError
from services.storage_service import papers_bucket


def _clean(value):
    return (value or "").strip()


# =========================================================
# BRANCHES
# =========================================================

def list_branches():
    return Branch.query.order_by(Branch.name).all()


def get_branch(branch_id):
    branch = db.session.get(Branch, branch_id)
    if not branch:
        raise NotFoundError("Branch not found")
    return branch


def _branch_fields(data):
    name = _clean(data.get("name"))
    code = _clean(data.get("code")).lower()
    if not name or not code:
        raise ValidationError("Name and code are required")
    return name, code, _clean(data.get("description")) or None


def _commit_branch(branch, action):
    code = branch.code
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"A branch with code '{code}' already exists")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to %s branch %s", action, code)
        raise ExamVaultError(f"Could not {action} branch")
    current_app.logger.info("Branch %s: %s", action, code)
    return branch


def create_branch(data):
    name, code, description = _branch_fields(data)
    branch = Branch(name=name, code=code, description=description)
    db.session.add(branch)
    return _commit_branch(branch, "add")


def update_branch(branch_id, data):
    name, code, description = _branch_fields(data)
    branch = get_branch(branch_id)
    branch.name = name
    branch.code = code
    branch.description = description
    return _commit_branch(branch, "update")


def _delete_branch_papers(branch_id):
    return Paper.query.filter_by(branch_id=branch_id).delete(synchronize_session=False)


def _delete_branch_semesters(branch_id):
    return Semester.query.filter_by(branch_id=branch_id).delete(synchronize_session=False)


def _paper_files(**criteria):
    return [
        row.file_path
        for row in db.session.query(Paper.file_path).filter_by(**criteria).all()
        if row.file_path
    ]


def delete_branch(branch_id):
    code = get_branch(branch_id).code
    files = _paper_files(branch_id=branch_id)

    try:
        papers = _delete_branch_papers(branch_id)
        semesters = _delete_branch_semesters(branch_id)
        Branch.query.filter_by(branch_id=branch_id).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error deleting branch %s", branch_id)
        raise ExamVaultError("Could not delete branch from the database")

    papers_bucket().remove(files)
    current_app.logger.info(
        "Deleted branch %s with %s semesters and %s papers",
        code, semesters, papers
    )
    return branch_id


# =========================================================
# SEMESTERS
# =========================================================

def list_semesters(branch_id):
    get_branch(branch_id)
    return (
        Semester.query
        .filter_by(branch_id=branch_id)
        .order_by(Semester.number)
        .all()
    )


def create_semester(data):
    try:
        branch_id = int(data.get("branch_id"))
        number = int(data.get("number"))
    except (TypeError, ValueError):
        raise ValidationError("Branch and semester number are required")
    if number < 1:
        raise ValidationError("Semester number must be a positive integer")

    get_branch(branch_id)
    semester = Semester(branch_id=branch_id, number=number)
    db.session.add(semester)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"Semester {number} already exists for this branch")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error adding semester")
        raise ExamVaultError("Could not add semester")

    current_app.logger.info("Semester added: branch=%s number=%s", branch_id, number)
    return semester


def _delete_semester_papers(semester_id):
    return Paper.query.filter_by(semester_id=semester_id).delete(synchronize_session=False)


def delete_semester(semester_id):
    semester = db.session.get(Semester, semester_id)
    if not semester:
        raise NotFoundError("Semester not found")
    files = _paper_files(semester_id=semester_id)

    try:
        papers = _delete_semester_papers(semester_id)
        Semester.query.filter_by(semester_id=semester_id).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error deleting semester %s", semester_id)
        raise ExamVaultError("Could not delete semester from the database")

    papers_bucket().remove(files)
    current_app.logger.info("Deleted semester %s with %s papers", semester_id, papers)
    return semester_id


# =========================================================
# PAPERS
# =========================================================

def list_papers(branch_id=None, semester_id=None):
    query = Paper.query
    if branch_id:
        query = query.filter_by(branch_id=branch_id)
    if semester_id:
        query = query.filter_by(semester_id=semester_id)
    return query.order_by(Paper.created_at.desc(), Paper.paper_id.desc()).all()


def delete_paper(paper_id):
    paper = db.session.get(Paper, paper_id)
    if not paper:
        raise NotFoundError("Paper not found")
    file_path = paper.file_path

    try:
        db.session.delete(paper)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error deleting paper %s", paper_id)
        raise ExamVaultError("Could not delete paper")

    papers_bucket().remove([file_path])
    return paper_id
