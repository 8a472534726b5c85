from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.role import Role
from models.user import User
from services.errors import AuthError, ConflictError, ValidationError
from services.policy_service import DEFAULT_ROLE
from utils.password_utils import hash_password, verify_password

MIN_PASSWORD_LENGTH = 6


def normalize_email(email):
    return (email or "").strip().lower()


def authenticate_user(email: str, password: str):
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = User.query.filter_by(email=email).first()

    if not user or not verify_password(password, user.password_hash):
        current_app.logger.info("Login failed for %s", email)
        raise AuthError("Invalid email or password")

    if user.is_active is False:
        current_app.logger.info("Login refused for inactive account %s", email)
        raise AuthError("Invalid email or password")

    return user


def register_user(email: str, password: str, full_name=None, role_name=DEFAULT_ROLE):
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required")
    if "@" not in email:
        raise ValidationError("Please enter a valid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    if User.query.filter_by(email=email).first():
        raise ConflictError("An account with this email already exists")

    role = get_or_create_role(role_name)
    user = User(
        email=email,
        password_hash=hash_password(password),
        full_name=(full_name or "").strip() or None,
        role_id=role.role_id,
        is_active=True
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("An account with this email already exists")

    current_app.logger.info("Registered account %s (%s)", email, role_name)
    return user


def get_or_create_role(role_name):
    role = Role.query.filter_by(role_name=role_name).first()
    if not role:
        role = Role(role_name=role_name)
        db.session.add(role)
        db.session.flush()
    return role


def load_session_user(user_id):
    """Resolve the user behind a session cookie; any failure means anonymous."""
    try:
        user = db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Session lookup failed")
        return None
    if user is None or user.is_active is False:
        return None
    return user
