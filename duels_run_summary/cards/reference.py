from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from duels_run_summary.api.cards import CardsApiClient
from duels_run_summary.config import CardsConfig
from duels_run_summary.utils.io import load_gzip_json, resolve_path, save_gzip_json

logger = logging.getLogger(__name__)

PASSIVE_BUFF_MECHANIC = "DUNGEON_PASSIVE_BUFF"


class CardsReference:
    """Read-only card metadata indexed by card id and dbf id.

    Built once per batch and handed to each stage that needs it.
    """

    def __init__(self, cards: Iterable[dict[str, Any]]) -> None:
        self._by_id: dict[str, dict[str, Any]] = {}
        self._by_dbf_id: dict[int, dict[str, Any]] = {}
        for card in cards:
            card_id = card.get("id")
            if card_id:
                self._by_id[str(card_id)] = card
            dbf_id = card.get("dbfId")
            if dbf_id is not None:
                try:
                    self._by_dbf_id[int(dbf_id)] = card
                except (TypeError, ValueError):
                    continue

    def __len__(self) -> int:
        return len(self._by_id)

    def get_card(self, card_id: str | None) -> dict[str, Any] | None:
        if not card_id:
            return None
        return self._by_id.get(card_id)

    def get_card_from_dbf_id(self, dbf_id: int | None) -> dict[str, Any] | None:
        if dbf_id is None:
            return None
        return self._by_dbf_id.get(dbf_id)

    def is_collectible(self, dbf_id: int) -> bool:
        card = self.get_card_from_dbf_id(dbf_id)
        return bool(card and card.get("collectible"))

    def has_mechanic(self, card_id: str | None, mechanic: str) -> bool:
        card = self.get_card(card_id)
        if not card:
            return False
        mechanics = card.get("mechanics") or []
        return mechanic in mechanics


def load_cards_reference(config: CardsConfig, root: Path) -> CardsReference:
    cache_path = resolve_path(root, config.cache_path)
    if cache_path.exists() and not config.refresh:
        cards = load_gzip_json(cache_path)
        logger.info("Loaded card reference from cache path=%s cards=%d", cache_path, len(cards))
        return CardsReference(cards)

    client = CardsApiClient(config.source_url, timeout_s=config.request_timeout_s)
    cards = client.fetch_cards()
    if not cards:
        raise RuntimeError(f"Card reference at {config.source_url} returned no cards")
    save_gzip_json(cache_path, cards)
    logger.info("Downloaded card reference url=%s cards=%d", config.source_url, len(cards))
    return CardsReference(cards)
