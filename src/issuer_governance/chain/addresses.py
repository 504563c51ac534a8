from __future__ import annotations

from bech32 import bech32_decode


def address_error(raw_value: str, *, prefix: str) -> str | None:
    """Return why ``raw_value`` is not a bech32 account address under ``prefix``.

    ``None`` means the address is acceptable. The check is purely local: the
    checksum and human readable part are verified, the chain is never asked
    whether the account exists.
    """
    candidate = raw_value.strip()
    if not candidate:
        return f'Invalid address "{raw_value}": value is empty'

    hrp, data = bech32_decode(candidate)
    if hrp is None or data is None:
        return f'Invalid address "{candidate}": not a valid bech32 string'

    if hrp != prefix:
        return f'Invalid address "{candidate}": prefix must be {prefix}'

    return None
