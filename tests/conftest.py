"""
ExamVault - Test Configuration and Fixtures
"""
import io

import pytest

from app import create_app
from config.config import TestConfig
from extensions import db
from models import Branch, Semester, Paper
from services.auth_service import register_user, get_or_create_role
from services.policy_service import ADMIN_ROLE
from utils.seed_data import seed_roles

PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        STORAGE_FOLDER = str(tmp_path / "storage")
        STORAGE_PUBLIC_URL = "http://files.test"

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
        seed_roles()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, email, role=None, full_name=None):
    with app.app_context():
        user = register_user(email, PASSWORD, full_name=full_name)
        if role:
            user.role_id = get_or_create_role(role).role_id
            db.session.commit()
        return user.user_id


def login(client, email, password=PASSWORD):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture
def student_client(app):
    make_user(app, "student@example.com", full_name="Sam Student")
    client = app.test_client()
    login(client, "student@example.com")
    return client


@pytest.fixture
def admin_client(app):
    make_user(app, "admin@example.com", role=ADMIN_ROLE)
    client = app.test_client()
    login(client, "admin@example.com")
    return client


def add_branch(app, code, name, description=None):
    with app.app_context():
        branch = Branch(code=code, name=name, description=description)
        db.session.add(branch)
        db.session.commit()
        return branch.branch_id


def add_semester(app, branch_id, number):
    with app.app_context():
        semester = Semester(branch_id=branch_id, number=number)
        db.session.add(semester)
        db.session.commit()
        return semester.semester_id


def add_paper(app, branch_id, semester_id, title, subject, year="2023", description=None):
    with app.app_context():
        paper = Paper(
            title=title,
            subject=subject,
            year=year,
            description=description,
            file_url=f"http://files.test/storage/papers/{title}.pdf",
            branch_id=branch_id,
            semester_id=semester_id
        )
        db.session.add(paper)
        db.session.commit()
        return paper.paper_id


def count_rows(app, model, **criteria):
    with app.app_context():
        return model.query.filter_by(**criteria).count()


def pdf_file(size=1024, name="paper.pdf", content_type="application/pdf"):
    data = b"%PDF-1.4\n" + b"0" * max(size - 9, 0)
    return (io.BytesIO(data), name, content_type)
