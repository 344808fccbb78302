import typing as t

from ninja_extra import ControllerBase

from accounts.models import Attendee


class UserAwareController(ControllerBase):
    def user(self) -> Attendee:
        """Get the authenticated attendee for this request."""
        return t.cast(Attendee, self.context.request.user)  # type: ignore[union-attr]
