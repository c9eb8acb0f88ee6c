# src/supplier_domain/domain/services/cnpj_codec.py
"""Normalization and display formatting of CNPJ identifiers.

The formatter is incremental: it applies as many punctuation rules as the
digits typed so far allow, so it can back an editable field
(``"1234"`` -> ``"12.34"``, ``"12345678000195"`` -> ``"12.345.678/0001-95"``).
No check-digit validation is performed.
"""

import re

IDENTIFIER_LENGTH = 14

_NON_DIGIT = re.compile(r"[^0-9]")

# Each rule replaces only its first match, in this order.
_FORMAT_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"^(\d{2})(\d)"), r"\1.\2"),
    (re.compile(r"^(\d{2})\.(\d{3})(\d)"), r"\1.\2.\3"),
    (re.compile(r"\.(\d{3})(\d)"), r".\1/\2"),
    (re.compile(r"(\d{4})(\d)"), r"\1-\2"),
)


def normalize_identifier(raw: str) -> str:
    """Strips every character that is not an ASCII digit."""
    if not isinstance(raw, str):
        raise TypeError(f"Identifier must be a string, got {type(raw).__name__}")
    return _NON_DIGIT.sub("", raw)


def format_identifier(digits: str) -> str:
    """Inserts CNPJ punctuation for display. Partial or over-length input is formatted best effort."""
    value = normalize_identifier(digits)
    for pattern, replacement in _FORMAT_RULES:
        value = pattern.sub(replacement, value, count=1)
    return value


def is_complete_identifier(value: str) -> bool:
    """True when the value normalizes to exactly IDENTIFIER_LENGTH digits."""
    return len(normalize_identifier(value)) == IDENTIFIER_LENGTH
