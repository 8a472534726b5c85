from extensions import db


class Branch(db.Model):
    __tablename__ = "branches"

    branch_id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    semesters = db.relationship("Semester", backref="branch", lazy=True)
    papers = db.relationship("Paper", backref="branch", lazy=True)

    def to_dict(self):
        return {
            "id": self.branch_id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
        }

    def __repr__(self):
        return f"<Branch {self.code}>"
