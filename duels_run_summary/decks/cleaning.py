from __future__ import annotations

import logging
from typing import Mapping

from duels_run_summary.cards.reference import CardsReference
from duels_run_summary.decks.deckstrings import (
    FORMAT_WILD,
    Deck,
    DeckstringError,
    parse_deckstring,
    write_deckstring,
)
from duels_run_summary.decks.heroes import resolve_hero_dbf_id

logger = logging.getLogger(__name__)


def clean_decklist(
    deckstring: str,
    player_card_id: str | None,
    cards: CardsReference,
    hero_aliases: Mapping[str, str] | None = None,
    expected_card_entries: int = 15,
    fallback_hero_dbf_id: int = 7,
) -> str | None:
    """Rebuild a recorded deck code as a wild deck with the run's hero.

    Returns None when the code cannot be decoded or does not hold exactly
    ``expected_card_entries`` collectible entries.
    """
    try:
        decoded = parse_deckstring(deckstring)
    except DeckstringError as exc:
        logger.error("Undecodable deck list deckstring=%s error=%s", deckstring, exc)
        return None

    valid_cards = [
        (dbf_id, count)
        for dbf_id, count in decoded.cards
        if count >= 1 and cards.is_collectible(dbf_id)
    ]
    if len(valid_cards) != expected_card_entries:
        logger.error(
            "Invalid deck list deckstring=%s collectible_entries=%d decoded_entries=%d",
            deckstring,
            len(valid_cards),
            len(decoded.cards),
        )
        return None

    hero = resolve_hero_dbf_id(player_card_id, cards, hero_aliases, fallback_hero_dbf_id)
    heroes = [hero] if hero is not None else decoded.heroes
    try:
        return write_deckstring(Deck(cards=valid_cards, heroes=heroes, format=FORMAT_WILD))
    except DeckstringError as exc:
        logger.error("Could not encode deck list deckstring=%s error=%s", deckstring, exc)
        return None
