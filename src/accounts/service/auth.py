import structlog
from django.utils import timezone
from ninja_jwt.schema import TokenObtainPairOutputSchema
from ninja_jwt.tokens import RefreshToken

from accounts.models import Attendee

logger = structlog.get_logger(__name__)


def get_token_pair_for_user(user: Attendee) -> TokenObtainPairOutputSchema:
    """Get a token pair for the attendee.

    The role travels in the token so clients can pick the right screens; the
    server still re-reads it from the database on every request.
    """
    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])

    logger.info("token_pair_generated", user_id=str(user.id), email=user.email)
    token = RefreshToken.for_user(user)
    token.payload.update(
        {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
        }
    )
    return TokenObtainPairOutputSchema(
        username=user.username,
        access=str(token.access_token),  # type: ignore[attr-defined]
        refresh=str(token),
    )
