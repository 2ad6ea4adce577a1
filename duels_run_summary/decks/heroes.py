from __future__ import annotations

import re
from typing import Mapping

from duels_run_summary.cards.reference import CardsReference

# HERO_01a, HERO_08bb... are skins of the class hero HERO_01, HERO_08
_HERO_SKIN_RE = re.compile(r"^(HERO_\d{2})[a-z]+$")
_CLASS_HERO_RE = re.compile(r"^HERO_\d{2}$")

CLASS_HERO_CARD_IDS = {
    "WARRIOR": "HERO_01",
    "SHAMAN": "HERO_02",
    "ROGUE": "HERO_03",
    "PALADIN": "HERO_04",
    "HUNTER": "HERO_05",
    "DRUID": "HERO_06",
    "WARLOCK": "HERO_07",
    "MAGE": "HERO_08",
    "PRIEST": "HERO_09",
    "DEMONHUNTER": "HERO_10",
}


def normalize_duels_hero_card_id(
    card_id: str | None,
    aliases: Mapping[str, str] | None = None,
    cards: CardsReference | None = None,
) -> str | None:
    """Map a Duels hero card id to the class hero it plays as.

    Order: configured alias, skin suffix, then the ``cardClass`` of the
    card in ``cards``. Ids nothing matches come back unchanged.
    """
    if not card_id:
        return None
    if aliases and card_id in aliases:
        return aliases[card_id]
    match = _HERO_SKIN_RE.match(card_id)
    if match:
        return match.group(1)
    if cards is not None and not _CLASS_HERO_RE.match(card_id):
        card = cards.get_card(card_id)
        class_hero = CLASS_HERO_CARD_IDS.get(str(card.get("cardClass") or "").upper()) if card else None
        if class_hero:
            return class_hero
    return card_id


def resolve_hero_dbf_id(
    card_id: str | None,
    cards: CardsReference,
    aliases: Mapping[str, str] | None = None,
    fallback_dbf_id: int = 7,
) -> int | None:
    normalized = normalize_duels_hero_card_id(card_id, aliases, cards)
    if normalized is None:
        return None
    card = cards.get_card(normalized)
    if card and card.get("dbfId") is not None:
        return int(card["dbfId"])
    return fallback_dbf_id
