"""Deck code reading and writing on top of ``hearthstone.deckstrings``.

Codes written by newer clients carry a sideboard section; it is dropped.
"""

from __future__ import annotations

import binascii
from typing import List, Tuple

from hearthstone import deckstrings
from hearthstone.enums import FormatType
from pydantic import BaseModel

FORMAT_UNKNOWN = int(FormatType.FT_UNKNOWN)
FORMAT_WILD = int(FormatType.FT_WILD)
FORMAT_STANDARD = int(FormatType.FT_STANDARD)


class DeckstringError(ValueError):
    pass


class Deck(BaseModel):
    cards: List[Tuple[int, int]] = []
    heroes: List[int] = []
    format: int = FORMAT_UNKNOWN


def parse_deckstring(deckstring: str) -> Deck:
    if not deckstring:
        raise DeckstringError("Empty deck code")
    cleaned = deckstring.strip()
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        parsed = deckstrings.parse_deckstring(cleaned)
    except (binascii.Error, ValueError, EOFError, TypeError, IndexError) as exc:
        raise DeckstringError(f"Invalid deck code: {exc}") from exc
    cards, heroes, deck_format = parsed[0], parsed[1], parsed[2]
    return Deck(
        cards=[(int(dbf_id), int(count)) for dbf_id, count in cards],
        heroes=[int(hero) for hero in heroes],
        format=int(deck_format),
    )


def write_deckstring(deck: Deck) -> str:
    if not deck.heroes:
        raise DeckstringError("A deck code needs at least one hero")
    bad_counts = [(dbf_id, count) for dbf_id, count in deck.cards if count < 1]
    if bad_counts:
        raise DeckstringError(f"Card entries without copies: {bad_counts}")
    try:
        deck_format = FormatType(deck.format)
    except ValueError as exc:
        raise DeckstringError(f"Unknown deck format {deck.format}") from exc
    return deckstrings.write_deckstring(list(deck.cards), list(deck.heroes), deck_format)
