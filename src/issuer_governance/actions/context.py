from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ComposeContext:
    """Deployment constants a composition needs, fetched once by the caller.

    ``base_denom`` is the issuer contract's canonical denom; it is only
    required by actions whose transform pins values to it.
    """

    address_prefix: str
    base_denom: str | None = None
