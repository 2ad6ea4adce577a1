from __future__ import annotations

import argparse
import logging
import sqlite3
from collections import Counter
from pathlib import Path
from typing import Any

from duels_run_summary.cards.reference import CardsReference, load_cards_reference
from duels_run_summary.config import AppConfig, load_config
from duels_run_summary.db import store
from duels_run_summary.pipeline.messages import unpack_messages
from duels_run_summary.pipeline.models import PERSISTED, RunEndEvent, RunOutcome
from duels_run_summary.pipeline.process_run_end import process_run_end
from duels_run_summary.utils.io import load_json_file, resolve_path

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[2]
SUCCESS_RESPONSE = {"statusCode": 200, "body": None}


def process_messages(
    messages: list[RunEndEvent],
    conn: sqlite3.Connection,
    cards: CardsReference,
    config: AppConfig,
) -> list[RunOutcome]:
    outcomes = []
    for message in messages:
        outcomes.append(process_run_end(message, conn, cards, config))

    persisted = sum(1 for outcome in outcomes if outcome.status == PERSISTED)
    reasons = Counter(outcome.reason for outcome in outcomes if outcome.status != PERSISTED)
    logger.info(
        "Batch summary messages=%d persisted=%d skipped=%d reasons=%s",
        len(messages),
        persisted,
        len(outcomes) - persisted,
        dict(reasons),
    )
    return outcomes


def process_batch(
    event: dict[str, Any],
    conn: sqlite3.Connection,
    cards: CardsReference,
    config: AppConfig,
) -> list[RunOutcome]:
    return process_messages(unpack_messages(event), conn, cards, config)


def handler(event: dict[str, Any], context: Any = None, config: AppConfig | None = None) -> dict[str, Any]:
    if config is None:
        config = load_config(ROOT / "config.yaml")
    messages = unpack_messages(event)
    if not messages:
        logger.info("Empty batch")
        return dict(SUCCESS_RESPONSE)
    db_path = resolve_path(ROOT, config.store.db_path)

    conn = store.get_connection(db_path, timeout_s=config.store.timeout_s)
    try:
        store.init_db(conn)
        # the reference is only needed once a message reaches deck cleaning
        if any(message.game_mode == config.run.game_mode for message in messages):
            cards = load_cards_reference(config.cards, ROOT)
        else:
            logger.info("No %s runs in batch messages=%d", config.run.game_mode, len(messages))
            cards = CardsReference([])
        process_messages(messages, conn, cards, config)
    except Exception:  # noqa: BLE001
        conn.rollback()
        raise
    finally:
        conn.close()
    return dict(SUCCESS_RESPONSE)


def main() -> None:
    parser = argparse.ArgumentParser(description="Build Duels run summaries from run-end batches")
    parser.add_argument("batches", nargs="+", type=Path, help="JSON files holding queue batches")
    parser.add_argument("--config", type=Path, default=ROOT / "config.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(level=config.run.log_level.upper(), format="%(levelname)s %(message)s")

    for batch_path in args.batches:
        logger.info("Processing batch path=%s", batch_path)
        response = handler(load_json_file(batch_path), config=config)
        logger.info("Batch done path=%s status=%s", batch_path, response["statusCode"])


if __name__ == "__main__":
    main()
