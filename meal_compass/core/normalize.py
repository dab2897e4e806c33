"""Ingredient name normalization: the shared lookup key for matching and merging.

No unit conversion happens here: '200 g flour' and '1 cup flour' both key
to 'flour' and their amounts are summed as raw numbers by the aggregator.
"""


def normalize(name: str) -> str:
    """Return the lower-cased, trimmed form of an ingredient name."""
    return (name or "").strip().lower()


def first_token(name: str) -> str:
    """Return the normalized first whitespace-delimited word, or '' if there is none."""
    parts = normalize(name).split()
    return parts[0] if parts else ""
