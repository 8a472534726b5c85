from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Profile
from services.errors import ExamVaultError

EDITABLE_FIELDS = ("full_name", "bio", "phone")


def get_or_create_profile(user):
    """Profiles are created the first time someone opens theirs."""
    profile = db.session.get(Profile, user.user_id)
    if profile:
        return profile

    profile = Profile(
        id=user.user_id,
        full_name=user.full_name,
        email=user.email
    )
    db.session.add(profile)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Creating profile for %s failed", user.email)
        raise ExamVaultError("Could not load your profile. Please try again.")
    return profile


def update_profile(user, data):
    profile = get_or_create_profile(user)
    for field in EDITABLE_FIELDS:
        if field in data:
            value = (data.get(field) or "").strip()
            setattr(profile, field, value or None)
    profile.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Updating profile for %s failed", user.email)
        raise ExamVaultError("Could not update your profile. Please try again.")
    return profile
