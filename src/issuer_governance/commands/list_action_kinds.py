from __future__ import annotations

from argparse import Namespace

from issuer_governance.actions.schemas import DEFAULT_REGISTRY
from issuer_governance.config import AppSettings
from issuer_governance.types import CommandResult, CommandStatus


def run_list_action_kinds(_: Namespace, settings: AppSettings) -> CommandResult:
    return CommandResult(
        command="list-action-kinds",
        status=CommandStatus.OK,
        details={
            "address_prefix": settings.address_prefix,
            "actions": [schema.as_dict() for schema in DEFAULT_REGISTRY],
        },
    )
