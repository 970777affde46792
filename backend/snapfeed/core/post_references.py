"""Post References — normalization of tag texts and tagged usernames before lookup.

Invariants:
    - Output preserves first-seen order
    - Blank entries are dropped, surrounding whitespace stripped
    - Duplicates collapse to one (a post is tagged with a tag/user at most once)
    - Existence is NOT checked here — unknown usernames are dropped by the writer's lookup
"""


def normalize_references(values: list[str] | None) -> list[str]:
    """Strip, drop blanks, and de-duplicate while keeping order."""
    if not values:
        return []
    seen: set[str] = set()
    result = []
    for raw in values:
        value = raw.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result
