"""Bounded Levenshtein edit distance."""

from __future__ import annotations

from approxtext.infrastructure.validation import validate_max_distance

__all__ = [
    "distance",
]


def distance(str1: str, str2: str, max_distance: int | None = None) -> int:
    """Calculate the Levenshtein distance between two strings.

    The minimum number of single-codepoint insertions, deletions and
    substitutions that turn one string into the other. No Unicode
    normalisation is performed.

    With max_distance, only cells within max_distance of the diagonal are
    computed (Gusfield 1997, pp. 263-264) and the function returns as soon
    as the diagonal ending in the bottom-right cell reaches the bound.
    Values along that diagonal never decrease, so the answer can only be
    the bound from there on.

    Args:
        str1: First string.
        str2: Second string.
        max_distance: Largest distance of interest. Results above it are
            returned as max_distance.

    Returns:
        The edit distance, capped at max_distance when one is given.

    Raises:
        InvalidArgumentError: If max_distance is not a non-negative integer.
    """
    max_distance = validate_max_distance(max_distance, optional=True)

    if str1 == str2:
        return 0

    # Columns follow the shorter string so the rolling row stays small
    if len(str1) > len(str2):
        str1, str2 = str2, str1
    short, long = str1, str2
    n = len(short)
    m = len(long)

    # The distance is at least the length difference
    if max_distance is not None and m - n >= max_distance:
        return max_distance
    if n == 0:
        return m

    band = m if max_distance is None else max_distance
    # Stands in for cells outside the band; must exceed any real distance,
    # and n * m + 1 > m for every n >= 1.
    unreachable = n * m + 1
    diagonal_offset = m - n

    # row[j] is D[i-1][j] before row i is computed and D[i][j] after
    row = [j if j <= band else unreachable for j in range(n + 1)]

    for i in range(1, m + 1):
        char = long[i - 1]
        lo = max(1, i - band)
        hi = min(n, i + band)

        diag = row[lo - 1]
        left = i if lo == 1 else unreachable
        row[lo - 1] = left

        for j in range(lo, hi + 1):
            above = row[j]
            cell = diag if short[j - 1] == char else diag + 1
            if above + 1 < cell:
                cell = above + 1
            if left + 1 < cell:
                cell = left + 1
            diag = above
            row[j] = cell
            left = cell

        if max_distance is not None:
            j = i - diagonal_offset
            if j >= lo and row[j] >= max_distance:
                return max_distance

    result = row[n]
    if max_distance is not None and result > max_distance:
        return max_distance
    return result
