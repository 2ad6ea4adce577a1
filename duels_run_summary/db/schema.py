SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS dungeon_run_loot_info (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id TEXT NOT NULL,
    bundle_type TEXT NOT NULL,
    option1 TEXT,
    option2 TEXT,
    option3 TEXT,
    chosen_option_index INTEGER,
    creation_date TEXT
);

CREATE INDEX IF NOT EXISTS idx_loot_run ON dungeon_run_loot_info (run_id, bundle_type);

CREATE TABLE IF NOT EXISTS replay_summary (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    review_id TEXT,
    run_id TEXT,
    game_mode TEXT,
    creation_date TEXT,
    player_class TEXT,
    player_card_id TEXT,
    player_rank TEXT,
    player_decklist TEXT,
    additional_result TEXT,
    result TEXT
);

CREATE INDEX IF NOT EXISTS idx_replay_run ON replay_summary (run_id);

CREATE TABLE IF NOT EXISTS duels_stats_by_run (
    run_id TEXT PRIMARY KEY,
    game_mode TEXT NOT NULL,
    run_start_date TEXT,
    run_end_date TEXT,
    build_number INTEGER,
    rating INTEGER,
    player_class TEXT,
    decklist TEXT,
    final_decklist TEXT,
    hero TEXT,
    hero_power TEXT,
    signature_treasure TEXT,
    treasures TEXT,
    passives TEXT,
    wins INTEGER,
    losses INTEGER
);
"""

LOOT_BUNDLE_TYPES = ("treasure", "hero-power", "signature-treasure")

RUN_SUMMARY_COLUMNS = (
    "game_mode",
    "run_start_date",
    "run_end_date",
    "build_number",
    "rating",
    "run_id",
    "player_class",
    "decklist",
    "final_decklist",
    "hero",
    "hero_power",
    "signature_treasure",
    "treasures",
    "passives",
    "wins",
    "losses",
)
