from issuer_governance.observability.redaction import REDACTED, redact_sensitive


def test_redact_signer_mnemonic() -> None:
    """Signing material must never reach the logs."""
    mnemonic = (
        "abandon abandon abandon abandon abandon abandon abandon "
        "abandon abandon abandon abandon about"
    )
    data = {"signer_mnemonic": mnemonic, "sender_address": "osmo1abc"}
    result = redact_sensitive(data)
    assert result["signer_mnemonic"] == REDACTED
    assert result["sender_address"] == "osmo1abc"


def test_redact_private_key() -> None:
    data = {"private_key": "deadbeef", "public_key": "pub-abc"}
    result = redact_sensitive(data)
    assert result["private_key"] == "***REDACTED***"
    assert result["public_key"] == "pub-abc"


def test_redact_nested_sensitive() -> None:
    data = {"outer": {"inner_api_key": "secret123", "normal": "value"}}
    result = redact_sensitive(data)
    assert result["outer"]["inner_api_key"] == REDACTED
    assert result["outer"]["normal"] == "value"


def test_redact_list_and_tuple_entries() -> None:
    data = {"requests": [{"token": "a"}, ({"password": "b"},)]}
    result = redact_sensitive(data)
    assert result["requests"][0]["token"] == REDACTED
    assert result["requests"][1][0]["password"] == REDACTED


def test_redact_case_insensitive() -> None:
    data = {"API_KEY": "secret", "Mnemonic": "secret", "TOKEN": "secret"}
    result = redact_sensitive(data)
    assert all(value == REDACTED for value in result.values())


def test_plain_values_pass_through() -> None:
    assert redact_sensitive("proposal_id") == "proposal_id"
    assert redact_sensitive({"proposal_id": 7}) == {"proposal_id": 7}
