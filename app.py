# app.py
import logging

import pandas as pd
import streamlit as st

from config import LOG_LEVEL
from db import DeckStore
from decks import deck_name
from errors import DeckError, NoRowsError, NotFoundError
from models import MCQItem, QuizKind, empty_item
from session_utils import init_session_state, add_manual_item, build_item, parse_option_lines

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

KIND_LABELS = {
    "Flashcards": QuizKind.FLASHCARD,
    "Multiple choice": QuizKind.MULTIPLE_CHOICE,
}


def items_to_frame(items) -> pd.DataFrame:
    rows = []
    for item in items:
        row = {"ID": item.id, "Question": item.question, "Answer": item.answer}
        if isinstance(item, MCQItem):
            row["Options"] = ", ".join(item.options)
        rows.append(row)
    return pd.DataFrame(rows)


def render_sidebar(store: DeckStore):
    with st.sidebar:
        st.markdown("### 📚 Decks")
        st.caption(f"Storage: `{store.root}`")

        deck_files = store.list_decks()
        options = ["(Select deck)"] + deck_files + ["(Create new deck…)"]
        current = st.session_state.current_deck
        index = options.index(current) if current in options else 0
        selected = st.selectbox("Current deck", options, index=index)

        if selected == "(Create new deck…)":
            new_name = st.text_input("New deck name")
            kind_label = st.radio("Deck type", list(KIND_LABELS.keys()))
            if st.button("Create Deck"):
                if not new_name.strip():
                    st.warning("Please provide a deck name.")
                else:
                    try:
                        path = store.create_deck(new_name.strip(), KIND_LABELS[kind_label])
                    except DeckError as e:
                        st.error(str(e))
                    else:
                        st.session_state.current_deck = path.name
                        st.success(f"Deck '{new_name.strip()}' created.")
                        st.rerun()
        elif selected == "(Select deck)":
            st.session_state.current_deck = None
        else:
            st.session_state.current_deck = selected

        st.markdown("---")
        with st.expander("🗂 All decks", expanded=False):
            loaded = store.load_all()
            for file_name, items in loaded:
                st.write(f"**{deck_name(file_name)}** ({file_name}): {len(items)} cards")
            skipped = len(deck_files) - len(loaded)
            if skipped:
                st.caption(f"{skipped} deck(s) empty or unreadable, see log.")


def render_edit_form(store: DeckStore, file_name: str, kind: QuizKind):
    st.subheader("✏️ Edit or delete a card")
    item_id = st.number_input("Card ID", min_value=1, step=1, key="edit_id_input")

    if st.button("Load card"):
        st.session_state.edit_item_id = int(item_id)

    edit_id = st.session_state.edit_item_id
    if edit_id is None:
        return

    try:
        with store.open_deck(file_name) as deck:
            item = deck.retrieve(edit_id)
    except NotFoundError:
        item = empty_item(kind)
    except DeckError as e:
        st.error(str(e))
        return

    if item.is_empty():
        st.warning(f"No card with ID {edit_id} in this deck.")
        return

    question = st.text_area("Question", value=item.question, key=f"edit_q_{edit_id}")
    options = None
    if isinstance(item, MCQItem):
        options_text = st.text_area(
            "Options (one per line)",
            value="\n".join(item.options),
            key=f"edit_opts_{edit_id}",
        )
        options = parse_option_lines(options_text)
    answer = st.text_input("Answer", value=item.answer, key=f"edit_a_{edit_id}")

    col_save, col_delete = st.columns(2)
    with col_save:
        if st.button("Save changes"):
            updated = build_item(kind, question, answer, options, item_id=edit_id)
            if updated is not None:
                try:
                    with store.open_deck(file_name) as deck:
                        deck.update(updated)
                except DeckError as e:
                    st.error(str(e))
                else:
                    st.success(f"Card {edit_id} updated.")

    with col_delete:
        if st.button("Delete card"):
            st.session_state["confirm_delete_card"] = edit_id

        if st.session_state.get("confirm_delete_card") == edit_id:
            st.warning(f"Delete card #{edit_id}?")
            col_y, col_n = st.columns(2)
            with col_y:
                if st.button("Yes, delete"):
                    try:
                        with store.open_deck(file_name) as deck:
                            deck.delete(edit_id)
                    except DeckError as e:
                        st.error(str(e))
                    else:
                        st.session_state.edit_item_id = None
                        st.success(f"Card {edit_id} deleted.")
                    st.session_state.pop("confirm_delete_card", None)
                    st.rerun()
            with col_n:
                if st.button("Cancel"):
                    st.session_state.pop("confirm_delete_card", None)
                    st.rerun()


def main():
    st.set_page_config(page_title="Quiz Decks", layout="wide")
    st.title("🃏 Quiz Decks – Flashcards & Multiple Choice")

    init_session_state()
    store: DeckStore = st.session_state.store

    render_sidebar(store)

    file_name = st.session_state.current_deck
    if file_name is None:
        st.info("Select or create a deck in the sidebar.")
        return

    try:
        with store.open_deck(file_name) as deck:
            kind = deck.kind
            try:
                items = deck.parse()
            except NoRowsError:
                items = []
    except DeckError as e:
        logger.error("Could not open %s: %s", file_name, e)
        st.error(str(e))
        return

    st.header(f"{deck_name(file_name)} ({kind})")

    if items:
        st.dataframe(items_to_frame(items), hide_index=True)
    else:
        st.info("No cards yet. Add one below.")

    # ---------- Add card ----------
    with st.expander("➕ Add a card", expanded=not items):
        manual_q = st.text_area("Question", key="add_q")
        manual_opts = None
        if kind is QuizKind.MULTIPLE_CHOICE:
            manual_opts = parse_option_lines(
                st.text_area("Options (one per line)", key="add_opts")
            )
        manual_a = st.text_input("Answer", key="add_a")

        if st.button("Add card"):
            add_manual_item(manual_q, manual_a, manual_opts)

    st.markdown("---")
    render_edit_form(store, file_name, kind)


if __name__ == "__main__":
    main()
