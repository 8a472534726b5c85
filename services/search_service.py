from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from models import Paper

LIKE_ESCAPE = "\\"


def escape_like(value):
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def search_papers(query, limit=None):
    """Case-insensitive match on title, subject or description, newest first."""
    query = (query or "").strip()
    if not query:
        return []

    if limit is None:
        limit = current_app.config.get("SEARCH_RESULT_LIMIT", 50)

    pattern = f"%{escape_like(query)}%"
    papers = (
        Paper.query
        .options(joinedload(Paper.branch), joinedload(Paper.semester))
        .filter(or_(
            Paper.title.ilike(pattern, escape=LIKE_ESCAPE),
            Paper.subject.ilike(pattern, escape=LIKE_ESCAPE),
            Paper.description.ilike(pattern, escape=LIKE_ESCAPE),
        ))
        .order_by(Paper.created_at.desc(), Paper.paper_id.desc())
        .limit(limit)
        .all()
    )
    return [p.to_dict(joined=True) for p in papers]
