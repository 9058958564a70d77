"""Tests for the client error taxonomy."""

import pytest
from anchorpy.error import ProgramError

from light_client.errors import (
    CLIENT_ERROR_MAP,
    InsufficientBalanceError,
    LightClientError,
    NoInputAccountsError,
    from_code,
)


def test_codes_are_unique_and_mapped():
    for code, err in CLIENT_ERROR_MAP.items():
        assert err.code == code
        assert err.name == err.__name__
        assert from_code(code) is err


def test_unknown_code():
    assert from_code(42) is None


def test_errors_carry_operands():
    err = InsufficientBalanceError(required=10, available=3)
    assert (err.required, err.available) == (10, 3)
    assert "10" in str(err) and "3" in str(err)


def test_errors_are_program_errors():
    with pytest.raises(ProgramError) as exc:
        raise NoInputAccountsError("transfer")
    assert issubclass(NoInputAccountsError, LightClientError)
    assert exc.value.code == 1011
    assert exc.value.detail == "transfer requires at least one input account"
