from __future__ import annotations

import base64
import json
import sqlite3
from typing import Any, Iterable, Sequence

from duels_run_summary.decks.deckstrings import FORMAT_STANDARD, Deck, write_deckstring

MAGE_HERO_DBF_ID = 637

CARDS: list[dict[str, Any]] = [
    {"id": "HERO_01", "dbfId": 7, "collectible": True, "type": "HERO", "cardClass": "WARRIOR"},
    {"id": "HERO_08", "dbfId": MAGE_HERO_DBF_ID, "collectible": True, "type": "HERO", "cardClass": "MAGE"},
    *[
        {"id": f"CARD_{index:02d}", "dbfId": 1000 + index, "collectible": True, "type": "MINION"}
        for index in range(1, 18)
    ],
    {"id": "FILLER_01", "dbfId": 2001, "collectible": False, "type": "SPELL"},
    {"id": "PVPDR_TREASURE_A", "dbfId": 3001, "type": "SPELL", "mechanics": ["DISCOVER"]},
    {"id": "PVPDR_PASSIVE_B", "dbfId": 3002, "type": "SPELL", "mechanics": ["DUNGEON_PASSIVE_BUFF"]},
    {"id": "PVPDR_TREASURE_C", "dbfId": 3003, "type": "SPELL"},
    {"id": "PVPDR_Hero_Jaina", "dbfId": 60000, "type": "HERO", "cardClass": "MAGE"},
]

# 15 collectible entries plus one non-collectible filler
DECK_ENTRIES = [(1000 + index, 1) for index in range(1, 14)] + [(1014, 2), (1015, 2), (2001, 1)]


def make_deckstring(
    entries: list[tuple[int, int]] | None = None,
    heroes: list[int] | None = None,
    deck_format: int = FORMAT_STANDARD,
) -> str:
    return write_deckstring(
        Deck(
            cards=DECK_ENTRIES if entries is None else entries,
            heroes=[MAGE_HERO_DBF_ID] if heroes is None else heroes,
            format=deck_format,
        )
    )


def run_end_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "gameMode": "paid-duels",
        "currentDuelsRunId": "run-1",
        "playerCardId": "HERO_08a",
        "playerDecklist": "FINAL_DECK",
        "additionalResult": "0-0",
        "buildNumber": 98765,
        "result": "won",
        "creationDate": "2026-01-06T18:30:00Z",
    }
    payload.update(overrides)
    return payload


def make_batch(*payloads: dict[str, Any]) -> dict[str, Any]:
    wrappers = [{"Message": json.dumps(payload)} for payload in payloads]
    return {"Records": [{"body": json.dumps(wrappers)}]}


def default_loot() -> list[dict[str, Any]]:
    return [
        {"bundle_type": "hero-power", "option1": "HP_A", "option2": "HP_B", "option3": "HP_C", "chosen_option_index": 2},
        {
            "bundle_type": "treasure",
            "option1": "PVPDR_TREASURE_A",
            "option2": "X",
            "option3": "Y",
            "chosen_option_index": 1,
        },
        {
            "bundle_type": "treasure",
            "option1": "X",
            "option2": "Y",
            "option3": "PVPDR_PASSIVE_B",
            "chosen_option_index": 3,
        },
        {"bundle_type": "signature-treasure", "option1": "SIG_Z", "option2": "S2", "option3": "S3", "chosen_option_index": 1},
        {"bundle_type": "loot", "option1": "L1", "option2": "L2", "option3": "L3", "chosen_option_index": 1},
    ]


def default_matches(deckstring: str | None = None) -> list[dict[str, Any]]:
    deckstring = deckstring or make_deckstring()
    return [
        {
            "review_id": "r1",
            "game_mode": "paid-duels",
            "creation_date": "2026-01-05T10:00:00Z",
            "player_class": "mage",
            "player_card_id": "HERO_08a",
            "player_rank": "4200",
            "player_decklist": deckstring,
            "additional_result": "0-0",
            "result": "won",
        },
        {
            "review_id": "r2",
            "game_mode": "paid-duels",
            "creation_date": "2026-01-05T10:20:00Z",
            "player_class": "mage",
            "player_card_id": "HERO_08a",
            "player_rank": "4230",
            "player_decklist": deckstring,
            "additional_result": "1-0",
            "result": "lost",
        },
        {
            "review_id": "r3",
            "game_mode": "paid-duels",
            "creation_date": "2026-01-05T10:40:00Z",
            "player_class": "warrior",
            "player_card_id": "HERO_01",
            "player_rank": "4210",
            "player_decklist": None,
            "additional_result": "1-1",
            "result": "won",
        },
    ]


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def raw_deckstring(
    heroes: Sequence[int],
    singles: Sequence[int] = (),
    doubles: Sequence[int] = (),
    others: Sequence[tuple[int, int]] = (),
    deck_format: int = 1,
) -> str:
    """Assemble a deck code byte by byte, bypassing the writer's checks."""
    data = bytearray(b"\0")
    data += _varint(1)
    data += _varint(deck_format)
    data += _varint(len(heroes))
    for hero in heroes:
        data += _varint(hero)
    data += _varint(len(singles))
    for dbf_id in singles:
        data += _varint(dbf_id)
    data += _varint(len(doubles))
    for dbf_id in doubles:
        data += _varint(dbf_id)
    data += _varint(len(others))
    for dbf_id, count in others:
        data += _varint(dbf_id) + _varint(count)
    return base64.b64encode(bytes(data)).decode("ascii")


def insert_loot_info(
    conn: sqlite3.Connection,
    run_id: str,
    loot: Iterable[dict[str, Any]],
    commit: bool = True,
) -> None:
    conn.executemany(
        """
        INSERT INTO dungeon_run_loot_info
            (run_id, bundle_type, option1, option2, option3, chosen_option_index, creation_date)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                run_id,
                item.get("bundle_type"),
                item.get("option1"),
                item.get("option2"),
                item.get("option3"),
                item.get("chosen_option_index"),
                item.get("creation_date"),
            )
            for item in loot
        ],
    )
    if commit:
        conn.commit()


def insert_match_summaries(
    conn: sqlite3.Connection,
    run_id: str,
    matches: Iterable[dict[str, Any]],
    commit: bool = True,
) -> None:
    conn.executemany(
        """
        INSERT INTO replay_summary
            (review_id, run_id, game_mode, creation_date, player_class, player_card_id,
             player_rank, player_decklist, additional_result, result)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                match.get("review_id"),
                run_id,
                match.get("game_mode"),
                match.get("creation_date"),
                match.get("player_class"),
                match.get("player_card_id"),
                match.get("player_rank"),
                match.get("player_decklist"),
                match.get("additional_result"),
                match.get("result"),
            )
            for match in matches
        ],
    )
    if commit:
        conn.commit()
