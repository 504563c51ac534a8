from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from issuer_governance.actions.composer import ComposeContext, PendingActionList, compose
from issuer_governance.actions.schemas import DEFAULT_REGISTRY, ActionKind, ActionRegistry
from issuer_governance.types import JsonDict


def parse_value_pairs(pairs: Sequence[str] | None) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs or ():
        name, separator, value = pair.partition("=")
        if not separator or not name.strip():
            raise ValueError(f"expected name=value, got {pair!r}")
        values[name.strip()] = value
    return values


def read_action_specs(path: str) -> list[JsonDict]:
    """Load ``[{"kind": ..., "values": {...}}, ...]`` from a JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"cannot read actions file {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"actions file {path} is not valid JSON: {exc.msg}") from exc

    if not isinstance(raw, list):
        raise ValueError("actions file must contain a JSON array")
    for index, spec in enumerate(raw):
        if not isinstance(spec, dict) or not isinstance(spec.get("kind"), str):
            raise ValueError(f"action {index} must be an object with a string 'kind'")
        if not isinstance(spec.get("values", {}), dict):
            raise ValueError(f"action {index} 'values' must be an object")
    return raw


def needs_base_denom(specs: Sequence[JsonDict]) -> bool:
    return any(spec.get("kind") == ActionKind.SET_DENOM_METADATA.value for spec in specs)


def compose_actions(
    specs: Sequence[JsonDict],
    *,
    context: ComposeContext,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> tuple[PendingActionList, list[dict[str, Any]]]:
    pending = PendingActionList()
    errors: list[dict[str, Any]] = []
    for index, spec in enumerate(specs):
        schema = registry.get(spec["kind"])
        if schema is None:
            errors.append({"index": index, "field": "kind", "message": f"unknown action kind {spec['kind']!r}"})
            continue
        result = compose(schema, spec.get("values", {}), context=context)
        if result.action is None:
            errors.extend({"index": index, **error.as_dict()} for error in result.errors)
            continue
        pending.append(result.action)
    return pending, errors
