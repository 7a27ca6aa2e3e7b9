"""Validation helpers for envelope query parameters."""

import re
from collections.abc import Mapping

from apikeyguard.domain.models.system_error import EncryptionParameterError

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int_parameter(query: Mapping[str, str], name: str, default: int) -> int:
    """Read an integer query parameter.

    A missing parameter yields ``default``. A present value must be a plain
    decimal integer; anything else is a caller error and is not defaulted.

    Args:
        query: Query parameters.
        name: Parameter to read.
        default: Value used when the parameter is absent.

    Returns:
        The parsed integer or ``default``.

    Raises:
        EncryptionParameterError: If the value is present but not an integer.
    """
    if name not in query:
        return default
    value = query[name]
    if value is None or not _INTEGER_PATTERN.fullmatch(value):
        raise EncryptionParameterError(f"expected an integer, got {value!r}", field=name)
    return int(value)
