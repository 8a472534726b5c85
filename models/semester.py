from extensions import db


class Semester(db.Model):
    __tablename__ = "semesters"

    semester_id = db.Column(db.Integer, primary_key=True)

    branch_id = db.Column(
        db.Integer,
        db.ForeignKey("branches.branch_id"),
        nullable=False
    )

    number = db.Column(db.Integer, nullable=False)

    papers = db.relationship("Paper", backref="semester", lazy=True)

    __table_args__ = (
        db.UniqueConstraint("branch_id", "number", name="unique_branch_semester"),
    )

    def to_dict(self):
        return {
            "id": self.semester_id,
            "branch_id": self.branch_id,
            "number": self.number,
        }

    def __repr__(self):
        return f"<Semester {self.number} branch={self.branch_id}>"
