from __future__ import annotations

from typing import Any, Iterable

from duels_run_summary.cards.reference import PASSIVE_BUFF_MECHANIC, CardsReference


def parse_additional_result(additional_result: str | None) -> tuple[int, int]:
    if not additional_result:
        raise ValueError("Missing win/loss record")
    parts = additional_result.strip().split("-")
    if len(parts) != 2:
        raise ValueError(f"Malformed win/loss record {additional_result!r}")
    try:
        wins, losses = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ValueError(f"Malformed win/loss record {additional_result!r}") from exc
    if wins < 0 or losses < 0:
        raise ValueError(f"Negative win/loss record {additional_result!r}")
    return wins, losses


def compute_wins_losses(additional_result: str | None, result: str | None) -> tuple[int, int]:
    wins, losses = parse_additional_result(additional_result)
    if result == "won":
        wins += 1
    elif result == "lost":
        losses += 1
    return wins, losses


def loot_picks(loot: Iterable[dict[str, Any]], bundle_type: str) -> list[str]:
    return [
        entry["picked_card_id"]
        for entry in loot
        if entry.get("bundle_type") == bundle_type and entry.get("picked_card_id")
    ]


def find_treasure_card_ids(loot: Iterable[dict[str, Any]]) -> list[str]:
    return loot_picks(loot, "treasure")


def find_signature_treasure_card_id(loot: Iterable[dict[str, Any]]) -> str | None:
    picks = loot_picks(loot, "signature-treasure")
    return picks[0] if picks else None


def split_treasures(card_ids: Iterable[str], cards: CardsReference) -> tuple[str, str]:
    treasures: list[str] = []
    passives: list[str] = []
    for card_id in card_ids:
        if cards.has_mechanic(card_id, PASSIVE_BUFF_MECHANIC):
            passives.append(card_id)
        else:
            treasures.append(card_id)
    return ",".join(treasures), ",".join(passives)


def safe_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return None
