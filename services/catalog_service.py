from extensions import db
from models import Branch, Semester, Paper
from services.errors import NotFoundError

BRANCH_ICONS = {
    "cse": "code",
    "bcs": "file-text",
    "ece": "book-open",
    "pharma": "beaker",
    "ee": "book-open",
    "ce": "book-open",
    "me": "book-open",
    "mechanical": "book-open",
    "civil": "book-open",
    "electrical": "book-open",
}
DEFAULT_ICON = "book-open"

BRANCH_COLORS = {
    "cse": "bg-blue-100 text-blue-700",
    "bcs": "bg-purple-100 text-purple-700",
    "ece": "bg-indigo-100 text-indigo-700",
    "pharma": "bg-green-100 text-green-700",
    "ee": "bg-yellow-100 text-yellow-700",
    "ce": "bg-red-100 text-red-700",
    "me": "bg-orange-100 text-orange-700",
    "mechanical": "bg-orange-100 text-orange-700",
    "civil": "bg-red-100 text-red-700",
    "electrical": "bg-yellow-100 text-yellow-700",
}
DEFAULT_COLOR = "bg-gray-100 text-gray-700"

ALL = "all"


def semester_title(number):
    try:
        number = int(number)
    except (TypeError, ValueError):
        return ""
    if number == 1:
        return "1st Semester"
    if number == 2:
        return "2nd Semester"
    if number == 3:
        return "3rd Semester"
    return f"{number}th Semester"


def branch_card(branch):
    code = (branch.code or "").lower()
    return {
        "id": branch.branch_id,
        "title": branch.name,
        "short_name": code.upper(),
        "description": branch.description or f"Question papers for {branch.name}",
        "icon": BRANCH_ICONS.get(code, DEFAULT_ICON),
        "color": BRANCH_COLORS.get(code, DEFAULT_COLOR),
        "url": f"/semester/{branch.code}",
    }


def filter_branch_cards(cards, query):
    query = (query or "").strip().lower()
    if not query:
        return cards
    return [
        c for c in cards
        if query in c["title"].lower() or query in c["short_name"].lower()
    ]


def list_branch_cards(query=None):
    branches = Branch.query.order_by(Branch.name).all()
    return filter_branch_cards([branch_card(b) for b in branches], query)


def get_branch_by_code(code):
    branch = Branch.query.filter_by(code=(code or "").strip().lower()).first()
    if not branch:
        raise NotFoundError("Branch not found")
    return branch


def get_semester(branch, number):
    try:
        number = int(number)
    except (TypeError, ValueError):
        raise NotFoundError("Semester not found")

    semester = Semester.query.filter_by(
        branch_id=branch.branch_id,
        number=number
    ).first()
    if not semester:
        raise NotFoundError("Semester not found")
    return semester


def count_papers(branch_id, semester_id):
    return Paper.query.filter_by(
        branch_id=branch_id,
        semester_id=semester_id
    ).count()


def list_semester_cards(branch_code):
    branch = get_branch_by_code(branch_code)
    semesters = (
        Semester.query
        .filter_by(branch_id=branch.branch_id)
        .order_by(Semester.number)
        .all()
    )

    cards = []
    for s in semesters:
        cards.append({
            "id": s.semester_id,
            "semester_number": s.number,
            "title": semester_title(s.number),
            "paper_count": count_papers(branch.branch_id, s.semester_id),
            "url": f"/papers/{branch.code}/{s.number}",
        })
    return branch, cards


def filter_papers(papers, text=None, year=None, subject=None):
    """Text match on title/subject, exact year, exact subject; all must hold."""
    text = (text or "").strip().lower()
    year = (year or "").strip()
    subject = (subject or "").strip()

    def keep(paper):
        if text and text not in paper.title.lower() and text not in paper.subject.lower():
            return False
        if year and year != ALL and paper.year != year:
            return False
        if subject and subject != ALL and paper.subject != subject:
            return False
        return True

    return [p for p in papers if keep(p)]


def unique_in_order(values):
    seen = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


def list_semester_papers(branch_code, semester_number, text=None, year=None, subject=None):
    branch = get_branch_by_code(branch_code)
    semester = get_semester(branch, semester_number)

    papers = (
        Paper.query
        .filter_by(branch_id=branch.branch_id, semester_id=semester.semester_id)
        .order_by(Paper.created_at.desc(), Paper.paper_id.desc())
        .all()
    )

    return {
        "branch_name": branch.name,
        "branch_code": branch.code,
        "semester_number": semester.number,
        "semester_title": semester_title(semester.number),
        "years": unique_in_order(p.year for p in papers),
        "subjects": unique_in_order(p.subject for p in papers),
        "papers": [p.to_dict() for p in filter_papers(papers, text, year, subject)],
    }


def catalog_summary():
    return {
        "branches": db.session.query(Branch).count(),
        "semesters": db.session.query(Semester).count(),
        "papers": db.session.query(Paper).count(),
    }
