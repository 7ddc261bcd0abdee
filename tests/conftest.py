import sqlite3

import pytest

from db import DeckStore
from models import QuizKind


@pytest.fixture
def store(tmp_path):
    return DeckStore(tmp_path)


@pytest.fixture
def card_deck(store):
    path = store.create_deck("geography", QuizKind.FLASHCARD)
    with store.open_deck(path.name) as deck:
        yield deck


@pytest.fixture
def mcq_deck(store):
    path = store.create_deck("geography", QuizKind.MULTIPLE_CHOICE)
    with store.open_deck(path.name) as deck:
        yield deck


@pytest.fixture
def raw_deck(tmp_path):
    """Write a deck file with an arbitrary schema and rows, bypassing the store."""

    def _make(file_name, schema, rows=(), insert=None):
        path = tmp_path / file_name
        conn = sqlite3.connect(path)
        conn.execute(schema)
        if rows:
            conn.executemany(insert, rows)
        conn.commit()
        conn.close()
        return path

    return _make
