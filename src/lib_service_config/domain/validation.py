"""Semantic checks applied to decoded configuration payloads."""

from __future__ import annotations

from typing import Final

MAX_PORT: Final[int] = 65535
_MAX_PORT_DIGITS: Final[int] = len(str(MAX_PORT))


def is_valid_port(port: str) -> bool:
    """Return ``True`` when *port* is empty or a decimal TCP port number.

    Leading zeros are accepted as long as the string stays within five digits.

    Examples
    --------
    >>> is_valid_port("")
    True
    >>> is_valid_port("8080"), is_valid_port("65535"), is_valid_port("00080")
    (True, True, True)
    >>> is_valid_port("65536"), is_valid_port("99999"), is_valid_port("080800")
    (False, False, False)
    >>> is_valid_port("80 "), is_valid_port("-1"), is_valid_port("+80")
    (False, False, False)
    """

    if port == "":
        return True
    if len(port) > _MAX_PORT_DIGITS or not (port.isascii() and port.isdigit()):
        return False
    return int(port) <= MAX_PORT
