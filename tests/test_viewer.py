from conftest import add_branch, add_semester, add_paper


def _paper(app):
    cse = add_branch(app, "cse", "Computer Science")
    sem = add_semester(app, cse, 2)
    return add_paper(app, cse, sem, "Endsem", "Compilers", "2021", description="Full paper")


def test_view_paper_with_joined_fields(client, app):
    paper_id = _paper(app)

    response = client.get(f"/view/{paper_id}")

    assert response.status_code == 200
    data = response.get_json()
    assert data["title"] == "Endsem"
    assert data["branch"] == {"name": "Computer Science", "code": "cse"}
    assert data["semester"] == {"number": 2}
    assert data["actions"]["download"] == f"/view/{paper_id}/download"
    assert data["actions"]["print"] is True


def test_share_payload(client, app):
    paper_id = _paper(app)

    share = client.get(f"/view/{paper_id}").get_json()["actions"]["share"]

    assert share["title"] == "Endsem"
    assert share["text"] == "Check out this question paper: Endsem - Compilers (2021)"
    assert share["url"].endswith(f"/view/{paper_id}")


def test_download_redirects_to_file(client, app):
    paper_id = _paper(app)

    response = client.get(f"/view/{paper_id}/download")

    assert response.status_code == 302
    assert response.headers["Location"] == "http://files.test/storage/papers/Endsem.pdf"


def test_missing_paper_is_not_found_state(client):
    response = client.get("/view/999")

    assert response.status_code == 404
    assert response.get_json() == {"status": "not_found", "message": "Paper not found", "home": "/"}
    assert client.get("/view/999/download").status_code == 404
