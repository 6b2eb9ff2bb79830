"""Identifier Resolution — pick one canonical integer id from path, query or body.

Invariants:
    - Lookup order is path → query → body; the first present (non-None) value wins
    - A present but unparsable value yields None, it never falls through to later sources
    - None means "no identifier" and is distinct from 0
    - Ids outside the signed 32-bit range of the Integer primary keys are well formed
      but can never match a row; routes answer them with 404 without querying

Design Decisions:
    - Pure functions, no Request objects: routes extract raw values, core decides
      (ADR: functional core, imperative shell)
    - bool rejected explicitly: JSON true would otherwise parse as 1
"""

import re

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

MIN_STORED_IDENTIFIER = -(2 ** 31)
MAX_STORED_IDENTIFIER = 2 ** 31 - 1


def parse_identifier(value: object) -> int | None:
    """Parse a base-10 integer id. Returns None when the value is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value):
        try:
            return int(value)
        except ValueError:
            # longer than sys.get_int_max_str_digits()
            return None
    return None


def resolve_identifier(
    path_value: object = None,
    query_value: object = None,
    body_value: object = None,
) -> int | None:
    """Resolve the request identifier from its three possible sources."""
    for candidate in (path_value, query_value, body_value):
        if candidate is not None:
            return parse_identifier(candidate)
    return None


def is_storable_identifier(entity_id: int) -> bool:
    """True when entity_id fits the Integer primary key columns."""
    return MIN_STORED_IDENTIFIER <= entity_id <= MAX_STORED_IDENTIFIER
