from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from issuer_governance.actions.context import ComposeContext

_EXPONENT_PATTERN = re.compile(r"^[0-9]+$")

MEMBER_WEIGHT = 1

ValueTransform = Callable[[Mapping[str, Any], ComposeContext], dict[str, Any]]


class TransformError(ValueError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


def members_transform(values: Mapping[str, Any], _: ComposeContext) -> dict[str, Any]:
    """``add`` becomes weighted member records, ``remove`` stays a plain address list."""
    add = values.get("add") or []
    remove = values.get("remove") or []
    return {
        **values,
        "add": [{"addr": address, "weight": MEMBER_WEIGHT} for address in add],
        "remove": list(remove),
    }


def parse_denom_unit(line: str) -> dict[str, Any]:
    """Parse one ``denom | exponent | alias1,alias2`` line."""
    parts = [part.strip() for part in line.strip().split("|")]
    denom = parts[0] if parts else ""
    exponent = parts[1] if len(parts) > 1 else ""
    aliases_raw = parts[2] if len(parts) > 2 else ""
    aliases = [alias.strip() for alias in aliases_raw.split(",") if alias.strip()]
    return {"denom": denom, "exponent": exponent, "aliases": aliases}


def parse_denom_units(text: str, *, base_denom: str | None) -> list[dict[str, Any]]:
    # Line 0 describes the base denom itself, so its exponent is pinned to 0.
    units: list[dict[str, Any]] = []
    for index, line in enumerate(text.rstrip().split("\n")):
        unit = parse_denom_unit(line)
        if not unit["denom"]:
            raise TransformError("denom_units", f'"denom" is required (line {index})')
        if index == 0:
            if base_denom is None:
                raise TransformError("denom_units", "base denom is unknown; query the issuer first")
            if unit["denom"] != base_denom:
                raise TransformError(
                    "denom_units",
                    f'"denom" on line 0 must be exactly "{base_denom}"',
                )
        if not unit["exponent"]:
            raise TransformError("denom_units", f'"exponent" is required (line {index})')
        if _EXPONENT_PATTERN.match(unit["exponent"]) is None:
            raise TransformError("denom_units", f'"exponent" must be number (line {index})')
        if index == 0 and unit["exponent"] != "0":
            raise TransformError("denom_units", '"exponent" on line 0 must be exactly "0"')
        units.append(unit)
    return units


def denom_metadata_transform(values: Mapping[str, Any], context: ComposeContext) -> dict[str, Any]:
    base = values.get("base")
    if context.base_denom is not None and base != context.base_denom:
        raise TransformError("base", f'"base" must be exactly "{context.base_denom}"')

    denom_units = parse_denom_units(str(values.get("denom_units") or ""), base_denom=context.base_denom)
    return {"metadata": {**values, "denom_units": denom_units}}
