from __future__ import annotations

import sqlite3
from typing import Iterator

import pytest

from duels_run_summary.cards.reference import CardsReference
from duels_run_summary.config import AppConfig
from duels_run_summary.db import store
from helpers import CARDS


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    connection = sqlite3.connect(":memory:")
    connection.row_factory = sqlite3.Row
    store.init_db(connection)
    yield connection
    connection.close()


@pytest.fixture
def cards() -> CardsReference:
    return CardsReference(CARDS)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()
