# Models package init
from bars_api.models.user import User
from bars_api.models.bar import Bar

__all__ = ["User", "Bar"]
