from conftest import count_rows
from models import Profile


def test_profile_created_on_first_view(app, student_client):
    assert count_rows(app, Profile) == 0

    response = student_client.get("/profile")

    assert response.status_code == 200
    profile = response.get_json()["profile"]
    assert profile["full_name"] == "Sam Student"
    assert profile["email"] == "student@example.com"
    assert profile["updated_at"] is None
    assert count_rows(app, Profile) == 1

    student_client.get("/profile")
    assert count_rows(app, Profile) == 1


def test_update_profile(student_client):
    response = student_client.put("/profile", json={
        "full_name": "Samantha Student",
        "bio": "Third year CSE",
        "phone": "  555-0100 "
    })

    assert response.status_code == 200
    profile = response.get_json()["profile"]
    assert profile["full_name"] == "Samantha Student"
    assert profile["bio"] == "Third year CSE"
    assert profile["phone"] == "555-0100"
    assert profile["updated_at"] is not None

    again = student_client.get("/profile").get_json()["profile"]
    assert again["bio"] == "Third year CSE"


def test_partial_update_keeps_other_fields(student_client):
    student_client.put("/profile", json={"bio": "Hello"})

    profile = student_client.put("/profile", json={"phone": "123"}).get_json()["profile"]

    assert profile["bio"] == "Hello"
    assert profile["phone"] == "123"
    assert profile["full_name"] == "Sam Student"
