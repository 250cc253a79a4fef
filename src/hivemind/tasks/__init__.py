"""Task abstraction: directives and the overlords they own."""

from .directive import Directive
from .overlord import Overlord, RoleOverlord
from .priorities import OverlordPriority

__all__ = ["Directive", "Overlord", "OverlordPriority", "RoleOverlord"]
