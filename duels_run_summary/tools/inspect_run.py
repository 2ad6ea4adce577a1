from __future__ import annotations

import sys
from pathlib import Path

from duels_run_summary.config import load_config
from duels_run_summary.db import store
from duels_run_summary.utils.io import resolve_path


def main() -> None:
    if len(sys.argv) != 2:
        print("usage: python -m duels_run_summary.tools.inspect_run <run_id>")
        sys.exit(2)
    run_id = sys.argv[1]

    root = Path(__file__).resolve().parents[2]
    config = load_config(root / "config.yaml")
    conn = store.get_connection(resolve_path(root, config.store.db_path), timeout_s=config.store.timeout_s)
    row = store.fetch_run_summary(conn, run_id)
    loot = store.fetch_run_loot(conn, run_id)
    matches = store.fetch_run_matches(conn, run_id)
    conn.close()

    print(f"run_id: {run_id}")
    print(f"loot_rows: {len(loot)}")
    print(f"match_rows: {len(matches)}")
    if row is None:
        print("No summary stored.")
        return
    for key, value in row.items():
        print(f"{key}: {_fmt(value)}")


def _fmt(value: object) -> str:
    if value is None or value == "":
        return "n/a"
    return str(value)


if __name__ == "__main__":
    main()
