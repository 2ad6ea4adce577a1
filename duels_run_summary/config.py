from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel


class RunConfig(BaseModel):
    game_mode: str = "paid-duels"
    log_level: str = "INFO"


class StoreConfig(BaseModel):
    db_path: str = "data/duels_run_summary.sqlite"
    timeout_s: float = 10


class CardsConfig(BaseModel):
    source_url: str = "https://static.zerotoheroes.com/hearthstone/jsoncards/cards.json"
    cache_path: str = "data/cards.json.gz"
    request_timeout_s: int = 20
    refresh: bool = False
    hero_aliases: Dict[str, str] = {}


class DecksConfig(BaseModel):
    expected_card_entries: int = 15
    fallback_hero_dbf_id: int = 7


class AppConfig(BaseModel):
    run: RunConfig = RunConfig()
    store: StoreConfig = StoreConfig()
    cards: CardsConfig = CardsConfig()
    decks: DecksConfig = DecksConfig()


def load_config(path: str | Path) -> AppConfig:
    data: Dict[str, Any] = {}
    config_path = Path(path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError("config.yaml must contain a mapping")
        data = loaded or {}
    config = AppConfig(**data)
    if not config.run.game_mode:
        raise ValueError("config.yaml run.game_mode must not be empty")
    return config
