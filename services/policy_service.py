"""
Role based access policy.

Each role maps to a set of capabilities; views ask for a capability,
never for a particular account.
"""

ADMIN_ROLE = "admin"
DEFAULT_ROLE = "student"

UPLOAD_PAPERS = "papers:upload"
EDIT_PROFILE = "profile:edit"
MANAGE_CATALOG = "catalog:manage"
MANAGE_PAPERS = "papers:manage"

ROLE_CAPABILITIES = {
    DEFAULT_ROLE: frozenset({UPLOAD_PAPERS, EDIT_PROFILE}),
    ADMIN_ROLE: frozenset({UPLOAD_PAPERS, EDIT_PROFILE, MANAGE_CATALOG, MANAGE_PAPERS}),
}


def capabilities_for(role_name):
    return ROLE_CAPABILITIES.get((role_name or "").lower(), frozenset())


def has_capability(user, capability):
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    return capability in capabilities_for(getattr(user, "role_name", None))
