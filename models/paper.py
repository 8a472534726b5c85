from extensions import db


class Paper(db.Model):
    __tablename__ = "papers"

    paper_id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    subject = db.Column(db.String(100), nullable=False)
    year = db.Column(db.String(10), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Public URL handed to readers, storage key kept for removal
    file_url = db.Column(db.String(500), nullable=False)
    file_path = db.Column(db.String(255), nullable=True)

    branch_id = db.Column(
        db.Integer,
        db.ForeignKey("branches.branch_id"),
        nullable=False
    )

    semester_id = db.Column(
        db.Integer,
        db.ForeignKey("semesters.semester_id"),
        nullable=False
    )

    uploaded_by = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=True
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    def to_dict(self, joined=False):
        data = {
            "id": self.paper_id,
            "title": self.title,
            "subject": self.subject,
            "year": self.year,
            "description": self.description,
            "file_url": self.file_url,
            "branch_id": self.branch_id,
            "semester_id": self.semester_id,
            "uploaded_by": self.uploaded_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if joined:
            data["branch"] = {
                "name": self.branch.name,
                "code": self.branch.code,
            } if self.branch else None
            data["semester"] = {
                "number": self.semester.number,
            } if self.semester else None
        return data

    def __repr__(self):
        return f"<Paper {self.paper_id} {self.title}>"
