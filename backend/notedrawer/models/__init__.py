# Models package init
from notedrawer.models.account import Drawer, User
from notedrawer.models.note import Note

__all__ = ["Drawer", "Note", "User"]
