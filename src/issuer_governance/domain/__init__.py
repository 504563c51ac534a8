"""Multisig proposal domain: statuses, vote options and decoded proposals."""

from issuer_governance.domain.proposal import (
    ProposalStatus,
    ProposalView,
    VoteOption,
    accepts_votes,
    is_executable,
    is_terminal_status,
    parse_proposal,
)

__all__ = [
    "ProposalStatus",
    "ProposalView",
    "VoteOption",
    "accepts_votes",
    "is_executable",
    "is_terminal_status",
    "parse_proposal",
]
