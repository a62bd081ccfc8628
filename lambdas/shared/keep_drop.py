"""Keep/drop rules shared by the roll executor and the exact enumerator.

Dice are ranked with a stable ascending sort on value, so among equal values
the die that appears later in the group ranks higher. Keeping the top 1 of
[4, 4, 2] therefore keeps index 1 and drops index 0.
"""

from collections.abc import Sequence

from shared.models import IndividualRoll, KeepDropConfig, KeepDropType


def kept_indices(values: Sequence[int], rule: KeepDropConfig) -> set[int]:
    """Return the positions of the dice that count toward the group sum.

    Args:
        values: Die results in roll order
        rule: Keep/drop rule to apply

    Returns:
        Set of indices into values that are kept
    """
    count = len(values)
    if rule.count >= count:
        return set(range(count))

    ranked = sorted(range(count), key=lambda i: values[i])

    if rule.type == KeepDropType.KEEP_HIGHEST:
        kept = ranked[count - rule.count:]
    elif rule.type == KeepDropType.KEEP_LOWEST:
        kept = ranked[:rule.count]
    elif rule.type == KeepDropType.DROP_HIGHEST:
        kept = ranked[:count - rule.count]
    elif rule.type == KeepDropType.DROP_LOWEST:
        kept = ranked[rule.count:]
    else:
        raise ValueError(f"Unknown keep/drop type: {rule.type}")

    return set(kept)


def kept_values(values: Sequence[int], rule: KeepDropConfig | None) -> list[int]:
    """Return the kept die values in roll order.

    Args:
        values: Die results in roll order
        rule: Keep/drop rule, or None to keep everything

    Returns:
        Values that count toward the sum
    """
    if rule is None:
        return list(values)
    keep = kept_indices(values, rule)
    return [value for i, value in enumerate(values) if i in keep]


def apply_keep_drop(
    values: Sequence[int], rule: KeepDropConfig | None
) -> list[IndividualRoll]:
    """Flag dropped dice.

    Args:
        values: Die results in roll order
        rule: Keep/drop rule, or None to keep everything

    Returns:
        IndividualRoll per die, in roll order
    """
    if rule is None:
        return [IndividualRoll(value=value, is_dropped=False) for value in values]
    keep = kept_indices(values, rule)
    return [
        IndividualRoll(value=value, is_dropped=i not in keep)
        for i, value in enumerate(values)
    ]
