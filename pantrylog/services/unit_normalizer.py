"""
Unit Normalizer

Maps a spoken (quantity, unit) pair onto a canonical unit. Mass ends up in
grams, volume in millilitres, unit-less quantities are counted items.
Unrecognized labels pass through lower-cased.
"""

from typing import Optional

from pantrylog.models.ledger import NormalizedQuantity

COUNT_UNIT = "count"

# alias -> (canonical unit, factor)
UNIT_ALIASES = {
    "kg": ("g", 1000),
    "kilo": ("g", 1000),
    "kilogram": ("g", 1000),
    "g": ("g", 1),
    "gram": ("g", 1),
    "gr": ("g", 1),
    "l": ("ml", 1000),
    "liter": ("ml", 1000),
    "ml": ("ml", 1),
    "milliliter": ("ml", 1),
}


def normalize(quantity: float, unit: Optional[str] = None) -> NormalizedQuantity:
    """
    Normalize a quantity to its canonical unit.

    Args:
        quantity: Amount in the given unit
        unit: Unit label as spoken, or None for discrete items

    Returns:
        NormalizedQuantity(quantity, unit)
    """
    if unit is None:
        return NormalizedQuantity(quantity, COUNT_UNIT)

    label = unit.strip().lower()
    if not label:
        return NormalizedQuantity(quantity, COUNT_UNIT)

    if label in UNIT_ALIASES:
        canonical, factor = UNIT_ALIASES[label]
        return NormalizedQuantity(quantity * factor, canonical)

    return NormalizedQuantity(quantity, label)
