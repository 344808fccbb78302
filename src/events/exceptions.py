"""Errors raised by the registration ledger and the team formation engine.

Messages name the offending activity or email so callers can show them verbatim.
"""

from common.exceptions import ConflictError, NotFoundError, PreconditionFailedError

# Conflict


class AlreadyRegisteredError(ConflictError):
    code = "already_registered"
    default_message = "Already registered for this event."


class TeamAlreadyExistsError(ConflictError):
    code = "team_already_exists"
    default_message = "You already have a team for this event."


class AlreadyInOtherTeamError(ConflictError):
    code = "already_in_other_team"
    default_message = '"{email}" is already part of another team for this event.'


class AlreadyLeaderError(ConflictError):
    code = "already_leader"
    default_message = '"{email}" is already a team leader for this event.'


class AlreadyFinalizedError(ConflictError):
    """Raised when a payment outcome arrives for a registration that is already settled."""

    code = "already_finalized"
    default_message = "Payment for this registration has already been finalized."


class DuplicateInRequestError(ConflictError):
    code = "duplicate_in_request"
    default_message = '"{email}" is already on this team.'


class SelfReferenceError(ConflictError):
    code = "self_reference"
    default_message = "You are the team leader; do not list yourself as a member."


class PaymentNotRequiredError(ConflictError):
    code = "payment_not_required"
    default_message = "This event is free, no payment needed."


class OrderIdInUseError(ConflictError):
    code = "order_id_in_use"
    default_message = 'Order "{order_id}" already belongs to another registration.'


class NotATeamActivityError(ConflictError):
    code = "not_a_team_activity"
    default_message = "This is not a team event."


# Not found


class ActivityUnavailableError(NotFoundError):
    code = "activity_unavailable"
    default_message = "Event not found."


class NotRegisteredError(NotFoundError):
    code = "not_registered"
    default_message = '"{email}" has not registered for this event yet.'


class NoTeamYetError(NotFoundError):
    code = "no_team_yet"
    default_message = "You don't have a team for this event."


class NotAMemberError(NotFoundError):
    code = "not_a_member"
    default_message = '"{email}" is not in your team.'


class UnknownOrderError(NotFoundError):
    code = "unknown_order"
    default_message = 'No registration found for order "{order_id}".'


# Precondition failed


class PaymentRequiredError(PreconditionFailedError):
    code = "payment_required"
    default_message = "This is a paid event. Please use the payment flow to register."


class PaymentIncompleteError(PreconditionFailedError):
    code = "payment_incomplete"
    default_message = '"{email}" has not completed payment for this event yet.'


class LeaderNotPaidError(PreconditionFailedError):
    code = "leader_not_paid"
    default_message = "You must register and complete payment before creating a team."


class TeamTooSmallError(PreconditionFailedError):
    code = "team_too_small"
    default_message = "Team must have at least {min_size} members (including you). Currently: {size}."


class TeamTooLargeError(PreconditionFailedError):
    code = "team_too_large"
    default_message = "Team can have at most {max_size} members (including you). Currently: {size}."


class TeamFullError(PreconditionFailedError):
    code = "team_full"
    default_message = "Team is at max capacity ({max_size} members including you)."
