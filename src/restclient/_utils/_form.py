from enum import Enum
from logging import Logger, getLogger
from typing import Any, Optional
from urllib.parse import urlencode

from ._tags import get_tag_name, iter_fields
from .constants import LOGGER_NAME, OPTION_OMIT_EMPTY

_logger = getLogger(LOGGER_NAME)


def format_value(value: Any) -> Optional[str]:
    """Convert a scalar field value to its form representation.

    Returns None for types the form encoder does not handle.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:.4f}"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str):
        return str(value.value) if isinstance(value, Enum) else str.__str__(value)
    return None


def struct_to_values(record: Any, logger: Optional[Logger] = None) -> dict[str, str]:
    """Convert a record to a mapping of form keys to values."""
    logger = logger or _logger
    values: dict[str, str] = {}
    for field in iter_fields(record):
        val = format_value(field.value)
        if val is None:
            logger.warning(
                f"Ignoring unhandled type {type(field.value).__name__} for field {field.name}"
            )
            continue

        name, opts = get_tag_name(field.name, field.form_tag, field.json_tag)
        if not name:
            continue
        if val == "" and opts.contains(OPTION_OMIT_EMPTY):
            continue

        values[name] = val
    return values


def encode_form(record: Any, logger: Optional[Logger] = None) -> bytes:
    """Encode a record as an application/x-www-form-urlencoded body.

    Keys are sorted so the output is stable regardless of field order.
    """
    logger = logger or _logger
    logger.debug(f"Encoding body ({record!r}) to form values")
    values = struct_to_values(record, logger)
    return urlencode(sorted(values.items())).encode("ascii")
