from collections.abc import Sequence

from shared.models.match import UnitModel

TOKEN_SEPARATOR = "|"
ID_SEPARATOR = ":"
ITEM_SEPARATOR = "."


def unit_token(unit: UnitModel) -> str:
    """
    Renders one unit with its sorted item multiset.
    e.g. TFT10_Jinx with items [2, 1, 2] -> "TFT10_Jinx:1.2.2"

    An itemless unit still yields a token ("TFT10_Jinx:").
    """
    items = ITEM_SEPARATOR.join(str(item) for item in sorted(unit.items))
    return f"{unit.character_id}{ID_SEPARATOR}{items}"


def comp_signature(units: Sequence[UnitModel]) -> str:
    """
    Canonical composition key for a board.

    Invariant to unit order and item order. The item loadout stays part of
    the key, so the same unit built two different ways is two compositions.
    """
    return TOKEN_SEPARATOR.join(sorted(unit_token(u) for u in units))


def unit_set(units: Sequence[UnitModel]) -> list[str]:
    return sorted({u.character_id for u in units})


def derive(units: Sequence[UnitModel]) -> tuple[str, list[str]]:
    return comp_signature(units), unit_set(units)
