import os

import pytest
from sqlalchemy.exc import OperationalError

from conftest import add_branch, add_semester, add_paper, count_rows, pdf_file
from models import Branch, Semester, Paper
from services import admin_service


@pytest.fixture
def tree(app):
    cse = add_branch(app, "cse", "Computer Science")
    ece = add_branch(app, "ece", "Electronics")
    s1 = add_semester(app, cse, 1)
    s2 = add_semester(app, cse, 2)
    e1 = add_semester(app, ece, 1)
    add_paper(app, cse, s1, "Midterm", "DSA")
    add_paper(app, cse, s2, "Final", "OOP")
    add_paper(app, ece, e1, "Signals", "SS")
    return {"cse": cse, "ece": ece, "s1": s1, "s2": s2, "e1": e1}


def _boom(*args, **kwargs):
    raise OperationalError("DELETE FROM semesters", {}, Exception("connection lost"))


# =========================================================
# BRANCHES
# =========================================================

def test_create_branch(admin_client):
    response = admin_client.post("/admin/branches", json={
        "name": "Computer Science", "code": "CSE", "description": "Core CS"
    })

    assert response.status_code == 201
    branch = response.get_json()["branch"]
    assert branch["code"] == "cse"
    listed = admin_client.get("/admin/branches").get_json()["branches"]
    assert [b["name"] for b in listed] == ["Computer Science"]


@pytest.mark.parametrize("payload", [
    {"name": "", "code": "cse"},
    {"name": "Computer Science", "code": "  "},
    {},
])
def test_create_branch_requires_name_and_code(admin_client, payload):
    response = admin_client.post("/admin/branches", json=payload)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Name and code are required"


def test_duplicate_branch_code(admin_client, tree):
    response = admin_client.post("/admin/branches", json={"name": "Other", "code": "cse"})

    assert response.status_code == 409


def test_update_branch(admin_client, tree):
    response = admin_client.put(f"/admin/branches/{tree['cse']}", json={
        "name": "Computer Science & Engineering", "code": "cse"
    })

    assert response.status_code == 200
    assert response.get_json()["branch"]["name"] == "Computer Science & Engineering"


def test_update_missing_branch(admin_client):
    response = admin_client.put("/admin/branches/42", json={"name": "X", "code": "x"})

    assert response.status_code == 404


def test_delete_branch_cascades(app, admin_client, tree):
    response = admin_client.delete(f"/admin/branches/{tree['cse']}")

    assert response.status_code == 200
    assert count_rows(app, Branch, branch_id=tree["cse"]) == 0
    assert count_rows(app, Semester, branch_id=tree["cse"]) == 0
    assert count_rows(app, Paper, branch_id=tree["cse"]) == 0
    # other branches untouched
    assert count_rows(app, Semester, branch_id=tree["ece"]) == 1
    assert count_rows(app, Paper, branch_id=tree["ece"]) == 1


def test_failed_semester_step_keeps_branch(app, admin_client, tree, monkeypatch):
    monkeypatch.setattr(admin_service, "_delete_branch_semesters", _boom)

    response = admin_client.delete(f"/admin/branches/{tree['cse']}")

    assert response.status_code == 500
    assert response.get_json()["message"] == "Could not delete branch from the database"
    listed = admin_client.get("/admin/branches").get_json()["branches"]
    assert tree["cse"] in [b["id"] for b in listed]
    # the earlier paper step was rolled back too
    assert count_rows(app, Paper, branch_id=tree["cse"]) == 2
    assert count_rows(app, Semester, branch_id=tree["cse"]) == 2


def test_delete_missing_branch(admin_client):
    assert admin_client.delete("/admin/branches/42").status_code == 404


# =========================================================
# SEMESTERS
# =========================================================

def test_create_semester(admin_client, tree):
    response = admin_client.post("/admin/semesters", json={"branch_id": tree["ece"], "number": 2})

    assert response.status_code == 201
    listed = admin_client.get(f"/admin/branches/{tree['ece']}/semesters").get_json()["semesters"]
    assert [s["number"] for s in listed] == [1, 2]


@pytest.mark.parametrize("payload", [
    {"number": 2},
    {"branch_id": 1, "number": ""},
    {"branch_id": 1, "number": 0},
    {"branch_id": 1, "number": -3},
])
def test_create_semester_validation(admin_client, tree, payload):
    response = admin_client.post("/admin/semesters", json=payload)

    assert response.status_code == 400


def test_duplicate_semester(admin_client, tree):
    response = admin_client.post("/admin/semesters", json={"branch_id": tree["cse"], "number": 1})

    assert response.status_code == 409


def test_semester_for_missing_branch(admin_client):
    response = admin_client.post("/admin/semesters", json={"branch_id": 99, "number": 1})

    assert response.status_code == 404


def test_delete_semester_cascades(app, admin_client, tree):
    response = admin_client.delete(f"/admin/semesters/{tree['s1']}")

    assert response.status_code == 200
    assert count_rows(app, Semester, semester_id=tree["s1"]) == 0
    assert count_rows(app, Paper, semester_id=tree["s1"]) == 0
    assert count_rows(app, Paper, semester_id=tree["s2"]) == 1


def test_failed_paper_step_keeps_semester(app, admin_client, tree, monkeypatch):
    monkeypatch.setattr(admin_service, "_delete_semester_papers", _boom)

    response = admin_client.delete(f"/admin/semesters/{tree['s1']}")

    assert response.status_code == 500
    assert count_rows(app, Semester, semester_id=tree["s1"]) == 1
    assert count_rows(app, Paper, semester_id=tree["s1"]) == 1


# =========================================================
# PAPERS
# =========================================================

def test_list_papers_filtered(admin_client, tree):
    papers = admin_client.get(f"/admin/papers?branch_id={tree['cse']}").get_json()["papers"]

    assert sorted(p["title"] for p in papers) == ["Final", "Midterm"]


def test_delete_paper_removes_stored_file(app, admin_client, tree):
    response = admin_client.post("/upload", data={
        "title": "Quiz", "subject": "DSA", "year": "2024",
        "branch_id": str(tree["cse"]), "semester_id": str(tree["s1"]),
        "file": pdf_file(512),
    }, content_type="multipart/form-data")
    paper = response.get_json()["paper"]
    stored = os.path.join(app.config["STORAGE_FOLDER"], "papers", paper["file_url"].rsplit("/", 1)[-1])
    assert os.path.isfile(stored)

    assert admin_client.delete(f"/admin/papers/{paper['id']}").status_code == 200

    assert not os.path.isfile(stored)
    assert count_rows(app, Paper, paper_id=paper["id"]) == 0
