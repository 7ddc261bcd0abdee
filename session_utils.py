# session_utils.py
from typing import List, Optional

import streamlit as st

from config import QUIZ_ROOT, ensure_root
from db import DeckStore, OPTION_SEPARATOR
from errors import DeckError
from models import CardItem, Item, MCQItem, QuizKind


def init_session_state():
    if "store" not in st.session_state:
        st.session_state.store = DeckStore(ensure_root(QUIZ_ROOT))
    if "current_deck" not in st.session_state:
        st.session_state.current_deck = None
    if "edit_item_id" not in st.session_state:
        st.session_state.edit_item_id = None


def parse_option_lines(text: str) -> List[str]:
    """One option per line; blank lines are dropped."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def build_item(kind: QuizKind, question: str, answer: str,
               options: Optional[List[str]] = None, item_id: int = 0) -> Optional[Item]:
    """
    Build an item from form input, or show a warning and return None.
    """
    question = question.strip()
    answer = answer.strip()
    if not question or not answer:
        st.warning("Please provide both a question and an answer.")
        return None

    if kind is QuizKind.FLASHCARD:
        return CardItem(id=item_id, question=question, answer=answer)

    options = options or []
    if not options:
        st.warning("A multiple choice question needs at least one option.")
        return None
    if any(OPTION_SEPARATOR in o for o in options):
        st.warning("Options cannot contain a comma.")
        return None
    if answer not in options:
        st.info("Note: the answer is not one of the options.")
    return MCQItem(id=item_id, question=question, options=options, answer=answer)


def add_manual_item(question: str, answer: str, options: Optional[List[str]] = None):
    file_name = st.session_state.get("current_deck")
    if file_name is None:
        st.error("Please select a deck before adding cards.")
        return

    store: DeckStore = st.session_state.store
    try:
        with store.open_deck(file_name) as deck:
            item = build_item(deck.kind, question, answer, options)
            if item is None:
                return
            row_id = deck.insert(item)
    except DeckError as e:
        st.error(str(e))
        return

    st.success(f"Card {row_id} added to the deck.")
