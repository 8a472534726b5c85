from .role import Role
from .user import User
from .branch import Branch
from .semester import Semester
from .paper import Paper
from .profile import Profile
__all__ = ["Role", "User", "Branch", "Semester", "Paper", "Profile"]
