"""Command handlers for the issuer governance CLI."""

from issuer_governance.commands.build_proposal import run_build_proposal
from issuer_governance.commands.compose_action import run_compose_action
from issuer_governance.commands.list_action_kinds import run_list_action_kinds
from issuer_governance.commands.list_pages import (
    run_list_proposals,
    run_list_roles,
    run_list_voters,
    run_list_votes,
)
from issuer_governance.commands.proposal_tx import run_close_proposal, run_execute_proposal, run_vote
from issuer_governance.commands.show_issuer import run_show_issuer
from issuer_governance.commands.show_proposal import run_show_proposal
from issuer_governance.commands.submit_proposal import run_submit_proposal

__all__ = [
    "run_build_proposal",
    "run_close_proposal",
    "run_compose_action",
    "run_execute_proposal",
    "run_list_action_kinds",
    "run_list_proposals",
    "run_list_roles",
    "run_list_voters",
    "run_list_votes",
    "run_show_issuer",
    "run_show_proposal",
    "run_submit_proposal",
    "run_vote",
]
