from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.models import Attendee


class HasRole(BasePermission):
    """Allow the request only when the authenticated attendee holds one of ``roles``.

    Role gating belongs to the request layer; the services never look at roles.
    """

    def __init__(self, *roles: Attendee.Role) -> None:
        """Store the permitted roles."""
        self.roles = set(roles)

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check the attendee's role tag."""
        user = request.user
        if not getattr(user, "is_authenticated", False):
            return False
        return user.role in self.roles  # type: ignore[union-attr]


IsStaffOrOrganizer = HasRole(Attendee.Role.STAFF, Attendee.Role.ORGANIZER)
IsOrganizer = HasRole(Attendee.Role.ORGANIZER)
