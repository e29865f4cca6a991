from folio.app.models.user import User, UserSession
from folio.app.models.post import Post
from folio.app.models.project import Project
from folio.app.models.profile import Profile

__all__ = ["User", "UserSession", "Post", "Project", "Profile"]
