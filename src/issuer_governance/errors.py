from __future__ import annotations


class GovernanceError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RoutingError(GovernanceError):
    """A contract role could not be resolved to a deployed address."""

    def __init__(self, message: str, *, action_kind: str | None = None) -> None:
        self.action_kind = action_kind
        super().__init__(message)


class BroadcastError(GovernanceError):
    """The chain rejected or never confirmed an execute call."""


class QueryError(GovernanceError):
    """A smart query failed, timed out, or returned an unexpected shape."""


class EventParsingError(GovernanceError):
    """A broadcast went through but an expected event attribute is missing."""

    def __init__(self, message: str, *, transaction_hash: str) -> None:
        self.transaction_hash = transaction_hash
        super().__init__(message)
