"""Reasons an inbound realtime event or connection attempt is turned away.

None of these ever reach a peer: an event error is local to the connection
that sent it, and only admission errors close a connection.
"""


class AdmissionError(Exception):
    """A connection attempt failed token verification."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class EventRejected(Exception):
    """Base class for dropped events; ``code`` is echoed in acks."""

    code = "rejected"


class InvalidPayload(EventRejected):
    code = "invalid_payload"


class NotAttached(EventRejected):
    code = "no_group"


class AlertNotFound(EventRejected):
    code = "not_found"


class ResolveNotPermitted(EventRejected):
    code = "forbidden"


class StoreUnavailable(EventRejected):
    code = "store_unavailable"


class UnknownSubject(EventRejected):
    """The token names a user that no longer exists."""

    code = "unknown_user"


class AlertAlreadyResolved(EventRejected):
    """A replayed alert id names an alert that has since been resolved."""

    code = "already_resolved"
