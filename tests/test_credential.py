"""
Tests for credential module - token cleaning, masking and attempt counting
"""

from pathlib import Path

import pytest

from credential import AttemptCounter, Credential, StorageLocation, clean_token, mask_token


@pytest.mark.parametrize("raw", [
    "ghp_ABC123",
    "ghp_ABC123\n",
    "ghp_ABC123\r\n",
    "  ghp_ABC123  \n\n",
    "\nghp_ABC 123\r",
])
def test_clean_token_strips_whitespace_variants(raw):
    assert clean_token(raw) == "ghp_ABC123"


def test_clean_token_keeps_tabs():
    """Only newlines, carriage returns and spaces are removed"""
    assert clean_token("ghp_A\tB\n") == "ghp_A\tB"


def test_mask_token_hides_secret():
    masked = mask_token("ghp_ABCDEF1234567890")
    assert "ABCDEF" not in masked
    assert masked.startswith("ghp_")
    assert masked.endswith("7890")


def test_mask_short_token_fully():
    assert mask_token("abc") == "***"


def test_credential_repr_does_not_leak():
    cred = Credential("ghp_SUPERSECRETVALUE99")
    assert "SUPERSECRET" not in repr(cred)


def test_credential_auth_header():
    assert Credential("ghp_X").auth_headers == {"Authorization": "token ghp_X"}


def test_credential_is_immutable():
    cred = Credential("ghp_X")
    with pytest.raises(AttributeError):
        cred.value = "other"


def test_storage_location_path():
    loc = StorageLocation(Path("/srv/tokens"), ".host_token", trusted=True)
    assert loc.path == Path("/srv/tokens/.host_token")


def test_attempt_counter_exhausts_at_ceiling():
    counter = AttemptCounter(ceiling=3)
    for _ in range(2):
        counter.record_failure("HTTP 401")
        assert not counter.exhausted
    counter.record_failure("HTTP 401")
    assert counter.exhausted
    assert counter.remaining == 0
    assert counter.failures == ["HTTP 401"] * 3
