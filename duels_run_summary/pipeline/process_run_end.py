from __future__ import annotations

import logging
import sqlite3

from duels_run_summary.analytics.run_summary import (
    compute_wins_losses,
    find_signature_treasure_card_id,
    find_treasure_card_ids,
    safe_int,
    split_treasures,
)
from duels_run_summary.cards.reference import CardsReference
from duels_run_summary.config import AppConfig
from duels_run_summary.db import store
from duels_run_summary.decks.cleaning import clean_decklist
from duels_run_summary.pipeline.models import (
    AMBIGUOUS_FIRST_MATCH,
    CORRUPTED_RUN,
    HERO_POWER_COUNT,
    INVALID_DECKLIST,
    INVALID_RESULT,
    MISSING_RUN_ID,
    NO_LOOT,
    NOT_TARGET_MODE,
    DuelsRunSummary,
    RunEndEvent,
    RunOutcome,
)
from duels_run_summary.utils.time import to_iso

logger = logging.getLogger(__name__)

FIRST_MATCH_RECORD = "0-0"


def process_run_end(
    message: RunEndEvent,
    conn: sqlite3.Connection,
    cards: CardsReference,
    config: AppConfig,
    commit: bool = True,
) -> RunOutcome:
    if message.game_mode != config.run.game_mode:
        logger.info("Skipping message game_mode=%s expected=%s", message.game_mode, config.run.game_mode)
        return RunOutcome.skipped(NOT_TARGET_MODE, message.resolved_run_id)

    run_id = message.resolved_run_id
    if not run_id:
        logger.error("Skipping message with empty run id message=%s", message.model_dump(by_alias=True))
        return RunOutcome.skipped(MISSING_RUN_ID)

    loot = store.fetch_run_loot(conn, run_id)
    if not loot:
        logger.info("No loot recorded run_id=%s", run_id)
        return RunOutcome.skipped(NO_LOOT, run_id)

    matches = store.fetch_run_matches(conn, run_id)
    first_matches = [match for match in matches if match["additional_result"] == FIRST_MATCH_RECORD]
    if len(first_matches) != 1:
        logger.info("Cannot resolve first match run_id=%s candidates=%d", run_id, len(first_matches))
        return RunOutcome.skipped(AMBIGUOUS_FIRST_MATCH, run_id)

    # a run is played with a single hero
    unique_heroes = sorted({match["player_card_id"] for match in matches}, key=str)
    if len(unique_heroes) != 1:
        logger.error("Corrupted run run_id=%s heroes=%s", run_id, unique_heroes)
        return RunOutcome.skipped(CORRUPTED_RUN, run_id)

    hero_powers = [entry for entry in loot if entry["bundle_type"] == "hero-power"]
    if len(hero_powers) != 1:
        logger.info("Expected one hero power run_id=%s found=%d", run_id, len(hero_powers))
        return RunOutcome.skipped(HERO_POWER_COUNT, run_id)

    try:
        wins, losses = compute_wins_losses(message.additional_result, message.result)
    except ValueError as exc:
        logger.error("Invalid win/loss record run_id=%s error=%s", run_id, exc)
        return RunOutcome.skipped(INVALID_RESULT, run_id)

    first_match = first_matches[0]
    decklist = clean_decklist(
        first_match["player_decklist"],
        first_match["player_card_id"],
        cards,
        hero_aliases=config.cards.hero_aliases,
        expected_card_entries=config.decks.expected_card_entries,
        fallback_hero_dbf_id=config.decks.fallback_hero_dbf_id,
    )
    if not decklist:
        return RunOutcome.skipped(INVALID_DECKLIST, run_id)

    treasures, passives = split_treasures(find_treasure_card_ids(loot), cards)
    row = DuelsRunSummary(
        game_mode=message.game_mode,
        run_start_date=to_iso(first_match["creation_date"]),
        run_end_date=to_iso(message.creation_date),
        build_number=message.build_number,
        rating=safe_int(first_match["player_rank"]),
        run_id=run_id,
        player_class=first_match["player_class"],
        decklist=decklist,
        final_decklist=message.player_decklist,
        hero=message.player_card_id,
        hero_power=hero_powers[0]["picked_card_id"],
        signature_treasure=find_signature_treasure_card_id(loot),
        treasures=treasures,
        passives=passives,
        wins=wins,
        losses=losses,
    )
    store.insert_run_summary(conn, row.model_dump(), commit=commit)
    logger.info(
        "Persisted run summary run_id=%s hero=%s wins=%d losses=%d",
        run_id,
        row.hero,
        row.wins,
        row.losses,
    )
    return RunOutcome.persisted(row)
