"""
Naming helpers for structured data (CSV/spreadsheet) tables.

Table and column names must be stable, lowercase identifiers. Headers that
slugify to the same value are disambiguated with numeric suffixes.

Dependencies: unicodedata (stdlib)
System role: Column/table name normalization for structured data upserts
"""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

MAX_HEADER_SUFFIX = 64


def slugify(text: str) -> str:
    """
    Turn arbitrary text into a lowercase ``a-z0-9_`` identifier.

    Args:
        text: Raw name

    Returns:
        str: Slug with diacritics removed and separators collapsed to ``_``
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = "".join(c for c in normalized if not unicodedata.combining(c))
    return _NON_ALNUM.sub("_", ascii_text.lower()).strip("_")


def make_structured_data_table_name(name: str, table_id: str) -> str:
    """Build a table name from its display name and the last 4 chars of its id."""
    return slugify(f"{name}_{table_id[-4:]}")


def get_sanitized_headers(raw_headers: list[str]) -> list[str]:
    """
    Slugify headers, suffixing duplicates with ``_2`` .. ``_63``.

    Args:
        raw_headers: Header row as read from the source file

    Returns:
        list[str]: Unique slugified headers, same order as the input

    Raises:
        ValueError: If no free suffix exists for a duplicated header
    """
    headers: list[str] = []
    for raw in raw_headers:
        slug = slugify(raw)
        if slug not in headers:
            headers.append(slug)
            continue

        for i in range(2, MAX_HEADER_SUFFIX):
            candidate = slugify(f"{slug}_{i}")
            if candidate not in headers:
                headers.append(candidate)
                break
        else:
            raise ValueError(
                f'Failed to generate unique slugified name for header "{raw}" '
                "after multiple attempts."
            )
    return headers
