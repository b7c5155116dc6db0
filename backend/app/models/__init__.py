# Models package init: importing the package registers every table with Base.metadata
from app.models.location import Location
from app.models.user import Role, User
from app.models.venue import Venue

__all__ = ["Location", "Role", "User", "Venue"]
