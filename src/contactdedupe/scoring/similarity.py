"""Normalized edit-distance similarity.

Callers normalize case and punctuation before calling; nothing here alters
its inputs, so the functions also serve exact byte-for-byte comparisons.
"""


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein edit distance between two strings.

    Uses a single rolling row over the shorter string, so memory is
    O(min(len(a), len(b))) and time O(len(a) * len(b)).

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    int
        Minimum number of single-character insertions, deletions and
        substitutions turning ``a`` into ``b``.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Compute normalized similarity ``1 - distance / max(len)``.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    float
        Similarity in [0.0, 1.0].

    Notes
    -----
    Both empty returns 1.0 (vacuously identical); exactly one empty
    returns 0.0.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    max_len = max(len(a), len(b))
    return (max_len - levenshtein_distance(a, b)) / max_len
