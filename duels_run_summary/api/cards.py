from __future__ import annotations

from typing import Any

import requests
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

DEFAULT_CARDS_URL = "https://static.zerotoheroes.com/hearthstone/jsoncards/cards.json"


def _should_retry(exc: BaseException) -> bool:
    if isinstance(exc, requests.HTTPError):
        if exc.response is None:
            return True
        status = exc.response.status_code
        return status >= 500 or status == 429
    return isinstance(exc, (requests.Timeout, requests.ConnectionError))


class CardsApiClient:
    def __init__(self, source_url: str = DEFAULT_CARDS_URL, timeout_s: int = 20) -> None:
        self.session = requests.Session()
        self.source_url = source_url
        self.timeout = (5, timeout_s)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=1, max=10),
        retry=retry_if_exception(_should_retry),
        reraise=True,
    )
    def _get_json(self) -> Any:
        response = self.session.get(self.source_url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_cards(self) -> list[dict[str, Any]]:
        return self._extract_cards(self._get_json())

    @staticmethod
    def _extract_cards(payload: Any) -> list[dict[str, Any]]:
        if isinstance(payload, list):
            return [item for item in payload if isinstance(item, dict)]
        if isinstance(payload, dict):
            for key in ("cards", "data", "results"):
                value = payload.get(key)
                if isinstance(value, list):
                    return [item for item in value if isinstance(item, dict)]
        return []
