"""Port validation rules.

The property tests pin the validator to the integer interpretation of the
string: empty passes, otherwise the string must be plain ASCII digits (at most
five) whose value lies in the TCP port range.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_service_config.domain.validation import MAX_PORT, is_valid_port


@pytest.mark.parametrize("port", ["", "0", "80", "5432", "9876", "65535", "00080", "08080"])
def test_accepts_valid_ports(port: str) -> None:
    assert is_valid_port(port)


@pytest.mark.parametrize("port", ["65536", "99999", "100000", "-1", "+80", " 80", "80\n", "8o", "0x50", "٨٠", "1_000"])
def test_rejects_invalid_ports(port: str) -> None:
    assert not is_valid_port(port)


@given(st.integers(min_value=0, max_value=MAX_PORT))
def test_every_port_number_is_valid(number: int) -> None:
    assert is_valid_port(str(number))


@given(st.integers(min_value=MAX_PORT + 1, max_value=10**12))
def test_numbers_above_range_are_invalid(number: int) -> None:
    assert not is_valid_port(str(number))


@given(st.text(alphabet="0123456789", min_size=1, max_size=5))
def test_short_decimal_strings_follow_integer_value(port: str) -> None:
    assert is_valid_port(port) == (int(port) <= MAX_PORT)
