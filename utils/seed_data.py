from flask import current_app

from extensions import db
from models.role import Role
from models.branch import Branch
from models.user import User
from services.auth_service import normalize_email, get_or_create_role
from services.policy_service import ADMIN_ROLE, ROLE_CAPABILITIES
from utils.password_utils import hash_password


def seed_roles():
    for role_name in ROLE_CAPABILITIES:
        existing = Role.query.filter_by(role_name=role_name).first()
        if not existing:
            db.session.add(Role(role_name=role_name))

    db.session.commit()
    current_app.logger.info("Roles verified: %s", ", ".join(ROLE_CAPABILITIES))


def seed_branches():
    branches = [
        {"code": "cse", "name": "Computer Science and Engineering"},
        {"code": "ece", "name": "Electronics and Communication Engineering"},
        {"code": "me", "name": "Mechanical Engineering"},
    ]

    for b in branches:
        existing = Branch.query.filter_by(code=b["code"]).first()
        if not existing:
            db.session.add(Branch(code=b["code"], name=b["name"]))

    db.session.commit()
    current_app.logger.info("Branches seeded")


def create_admin(email, password):
    """Create an admin account, or promote an existing one."""
    email = normalize_email(email)
    role = get_or_create_role(ADMIN_ROLE)

    user = User.query.filter_by(email=email).first()
    if user:
        user.role_id = role.role_id
        if password:
            user.password_hash = hash_password(password)
    else:
        user = User(
            email=email,
            password_hash=hash_password(password),
            role_id=role.role_id,
            is_active=True
        )
        db.session.add(user)

    db.session.commit()
    current_app.logger.info("Admin account ready: %s", email)
    return user


def run_seed():
    seed_roles()
    seed_branches()
