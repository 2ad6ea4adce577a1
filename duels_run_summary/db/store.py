from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from duels_run_summary.db.schema import LOOT_BUNDLE_TYPES, RUN_SUMMARY_COLUMNS, SCHEMA_SQL


def get_connection(db_path: Path, timeout_s: float = 10) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, timeout=timeout_s)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def fetch_run_loot(conn: sqlite3.Connection, run_id: str) -> list[dict[str, Any]]:
    placeholders = ", ".join("?" for _ in LOOT_BUNDLE_TYPES)
    rows = conn.execute(
        f"""
        SELECT bundle_type,
               CASE
                   WHEN chosen_option_index = 1 THEN option1
                   WHEN chosen_option_index = 2 THEN option2
                   ELSE option3
               END AS picked_card_id
        FROM dungeon_run_loot_info
        WHERE run_id = ?
        AND bundle_type IN ({placeholders})
        ORDER BY id
        """,
        (run_id, *LOOT_BUNDLE_TYPES),
    ).fetchall()
    return [
        {
            "bundle_type": row["bundle_type"],
            "picked_card_id": row["picked_card_id"],
        }
        for row in rows
    ]


def fetch_run_matches(conn: sqlite3.Connection, run_id: str) -> list[dict[str, Any]]:
    rows = conn.execute(
        """
        SELECT creation_date, player_class, player_card_id, player_rank,
               player_decklist, additional_result
        FROM replay_summary
        WHERE run_id = ?
        AND player_decklist IS NOT NULL
        ORDER BY id
        """,
        (run_id,),
    ).fetchall()
    results = []
    for row in rows:
        results.append(
            {
                "creation_date": row["creation_date"],
                "player_class": row["player_class"],
                "player_card_id": row["player_card_id"],
                "player_rank": row["player_rank"],
                "player_decklist": row["player_decklist"],
                "additional_result": row["additional_result"],
            }
        )
    return results


def insert_run_summary(
    conn: sqlite3.Connection,
    row: dict[str, Any],
    commit: bool = True,
) -> None:
    columns = ", ".join(RUN_SUMMARY_COLUMNS)
    placeholders = ", ".join("?" for _ in RUN_SUMMARY_COLUMNS)
    conn.execute(
        f"INSERT OR REPLACE INTO duels_stats_by_run ({columns}) VALUES ({placeholders})",
        tuple(row.get(column) for column in RUN_SUMMARY_COLUMNS),
    )
    if commit:
        conn.commit()


def fetch_run_summary(conn: sqlite3.Connection, run_id: str) -> dict[str, Any] | None:
    row = conn.execute(
        f"SELECT {', '.join(RUN_SUMMARY_COLUMNS)} FROM duels_stats_by_run WHERE run_id = ?",
        (run_id,),
    ).fetchone()
    if row is None:
        return None
    return {column: row[column] for column in RUN_SUMMARY_COLUMNS}


def count_run_summaries(conn: sqlite3.Connection, run_id: str | None = None) -> int:
    if run_id is None:
        row = conn.execute("SELECT COUNT(*) AS count FROM duels_stats_by_run").fetchone()
    else:
        row = conn.execute(
            "SELECT COUNT(*) AS count FROM duels_stats_by_run WHERE run_id = ?",
            (run_id,),
        ).fetchone()
    return row["count"] if row else 0

