"""Variable name canonicalization and display ordering.

Regression tables spell the same regressor in slightly different ways
(backtick-quoted, padded, mixed case). Ordering works on a normalized form,
while the names themselves are returned untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

from regtables.config import config

__all__ = ["comparison_key", "normalize_var_name", "sort_variables", "variable_order"]


def normalize_var_name(name: object) -> str:
    """Strip backticks and surrounding whitespace from a variable name.

    Args:
        name: Raw variable name (None is treated as empty)

    Returns:
        Normalized name, case preserved

    """
    if name is None:
        return ""
    return str(name).replace("`", "").strip()


def comparison_key(name: object) -> str:
    """Return the lower-cased normalized form used for priority matching."""
    return normalize_var_name(name).lower()


def variable_order(is_iv: bool) -> list[str]:
    """Get the priority list of normalized variable names.

    Args:
        is_iv: Whether the instrument-specific variables lead the list

    Returns:
        Ordered list of normalized, lower-cased variable names

    """
    baseline = config.baseline_variable_order
    if is_iv:
        return [*config.iv_variable_order, *baseline]
    return list(baseline)


def sort_variables(names: Iterable[str], is_iv: bool) -> list[str]:
    """Order variable names for display.

    Names found in the priority list come first, in list order; the rest
    follow in lexicographic order.

    Args:
        names: Variable names to order
        is_iv: Whether to use the IV priority list

    Returns:
        The same names in display order

    """
    positions: dict[str, int] = {}
    for position, key in enumerate(variable_order(is_iv)):
        positions.setdefault(key, position)

    known: list[str] = []
    unknown: list[str] = []
    for name in names:
        if comparison_key(name) in positions:
            known.append(name)
        else:
            unknown.append(name)

    known.sort(key=lambda n: positions[comparison_key(n)])
    unknown.sort()
    return known + unknown
