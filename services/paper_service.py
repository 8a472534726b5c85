from sqlalchemy.orm import joinedload

from extensions import db
from models import Paper
from services.errors import NotFoundError


def get_paper(paper_id):
    paper = (
        db.session.query(Paper)
        .options(joinedload(Paper.branch), joinedload(Paper.semester))
        .filter(Paper.paper_id == paper_id)
        .first()
    )
    if not paper:
        raise NotFoundError("Paper not found")
    return paper


def share_payload(paper, page_url):
    return {
        "title": paper.title,
        "text": f"Check out this question paper: {paper.title} - {paper.subject} ({paper.year})",
        "url": page_url,
    }


def paper_view(paper, page_url, download_url):
    data = paper.to_dict(joined=True)
    data["actions"] = {
        "download": download_url,
        "share": share_payload(paper, page_url),
        "print": True,
    }
    return data
