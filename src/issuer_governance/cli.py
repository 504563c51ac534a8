from __future__ import annotations

import json
from argparse import ArgumentParser, Namespace
from collections.abc import Callable, Sequence

from issuer_governance.commands import (
    run_build_proposal,
    run_close_proposal,
    run_compose_action,
    run_execute_proposal,
    run_list_action_kinds,
    run_list_proposals,
    run_list_roles,
    run_list_voters,
    run_list_votes,
    run_show_issuer,
    run_show_proposal,
    run_submit_proposal,
    run_vote,
)
from issuer_governance.config import AppSettings, get_settings
from issuer_governance.domain.proposal import VoteOption
from issuer_governance.observability.logging import configure_logging
from issuer_governance.pagination.sources import ROLE_LISTS
from issuer_governance.types import CommandResult, CommandStatus

CommandHandler = Callable[[Namespace, AppSettings], CommandResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "list-action-kinds": run_list_action_kinds,
    "compose-action": run_compose_action,
    "build-proposal": run_build_proposal,
    "submit-proposal": run_submit_proposal,
    "vote": run_vote,
    "execute-proposal": run_execute_proposal,
    "close-proposal": run_close_proposal,
    "list-proposals": run_list_proposals,
    "list-votes": run_list_votes,
    "list-voters": run_list_voters,
    "show-proposal": run_show_proposal,
    "list-roles": run_list_roles,
    "show-issuer": run_show_issuer,
}


def _add_page_arguments(parser: ArgumentParser) -> None:
    parser.add_argument("--cursor", default=None, help="key of the last item of the previous page")
    parser.add_argument("--limit", type=int, default=None)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="issuer-governance", description="Token issuer multisig governance CLI")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-action-kinds")

    compose = subparsers.add_parser("compose-action")
    compose.add_argument("--kind", required=True)
    compose.add_argument("--value", action="append", default=[], metavar="NAME=VALUE")
    compose.add_argument("--base-denom", default=None)

    for name in ("build-proposal", "submit-proposal"):
        proposal = subparsers.add_parser(name)
        proposal.add_argument("--title", required=True)
        proposal.add_argument("--description", default="")
        proposal.add_argument("--actions-file", required=True)
        proposal.add_argument("--base-denom", default=None)

    vote = subparsers.add_parser("vote")
    vote.add_argument("--proposal-id", required=True, type=int)
    vote.add_argument(
        "--option",
        required=True,
        choices=[option.value for option in VoteOption],
    )

    for name in ("execute-proposal", "close-proposal", "show-proposal"):
        single = subparsers.add_parser(name)
        single.add_argument("--proposal-id", required=True, type=int)

    _add_page_arguments(subparsers.add_parser("list-proposals"))
    votes = subparsers.add_parser("list-votes")
    votes.add_argument("--proposal-id", required=True, type=int)
    _add_page_arguments(votes)
    _add_page_arguments(subparsers.add_parser("list-voters"))

    roles = subparsers.add_parser("list-roles")
    roles.add_argument("--list", required=True, choices=sorted(ROLE_LISTS))
    _add_page_arguments(roles)

    subparsers.add_parser("show-issuer")

    return parser


def _emit_result(result: CommandResult, *, as_json: bool) -> None:
    if as_json:
        print(result.to_json())
        return

    print(f"{result.command}: {result.status.value}")
    if result.details:
        print(json.dumps(result.details, indent=2, sort_keys=True))


def entrypoint(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = get_settings()
    configure_logging(settings.log_level)

    handler = COMMAND_HANDLERS[str(args.command)]
    result = handler(args, settings)
    _emit_result(result, as_json=bool(args.json))
    return 1 if result.status == CommandStatus.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(entrypoint())
