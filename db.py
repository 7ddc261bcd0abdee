# db.py
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from decks import DECK_SUFFIX, classify, deck_path
from errors import (
    AlreadyExistsError,
    DeckError,
    IllegalDeckError,
    InvalidKindError,
    NoRowsError,
    NotFoundError,
    RowDecodeError,
    SchemaError,
    StatementError,
)
from models import CardItem, Item, MCQItem, QuizKind

logger = logging.getLogger(__name__)

OPTION_SEPARATOR = ","

# New decks always declare an explicit INTEGER PRIMARY KEY, which SQLite
# aliases to the rowid (AUTOINCREMENT: deleted ids are never handed out
# again). Older decks may have no id column at all, or "id INT primary key"
# (not a rowid alias, so id stays NULL), which is why every query below
# addresses rows by rowid.
SCHEMAS = {
    QuizKind.FLASHCARD: """
        CREATE TABLE IF NOT EXISTS cards (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            question TEXT NOT NULL,
            answer TEXT NOT NULL
        );
        """,
    QuizKind.MULTIPLE_CHOICE: """
        CREATE TABLE IF NOT EXISTS cards (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            question TEXT NOT NULL,
            options TEXT NOT NULL, -- comma-joined option list
            answer TEXT NOT NULL
        );
        """,
}


# ---------- Option codec ----------

def encode_options(options: Iterable[str]) -> str:
    """
    Join MCQ options into the single `options` column.
    There is no escaping: an option containing a comma will come back split.
    """
    return OPTION_SEPARATOR.join(options)


def decode_options(text: str) -> Tuple[str, ...]:
    if text == "":
        return ()
    return tuple(text.split(OPTION_SEPARATOR))


# ---------- Connections ----------

def get_connection(path: Union[str, Path], must_exist: bool = False) -> sqlite3.Connection:
    """
    Open a deck file. With must_exist=True the file is opened read-write
    without being created, so a missing deck raises sqlite3.OperationalError.
    """
    path = Path(path)
    if must_exist:
        return sqlite3.connect(f"{path.resolve().as_uri()}?mode=rw", uri=True)
    return sqlite3.connect(path)


def _table_columns(conn: sqlite3.Connection) -> set:
    cursor = conn.execute("SELECT * FROM cards LIMIT 1")
    columns = {d[0] for d in cursor.description}
    cursor.close()
    return columns


def _select_columns(kind: QuizKind) -> str:
    return ", ".join(("rowid",) + kind.columns)


def _row_to_item(kind: QuizKind, row) -> Item:
    if any(value is None for value in row[1:]):
        raise RowDecodeError(row[0])
    if kind is QuizKind.FLASHCARD:
        return CardItem(id=row[0], question=row[1], answer=row[2])
    if kind is QuizKind.MULTIPLE_CHOICE:
        return MCQItem(
            id=row[0],
            question=row[1],
            options=decode_options(row[2]),
            answer=row[3],
        )
    raise InvalidKindError(f"Cannot read rows of kind {kind.name}")


def _require_kind(item: Item, kind: QuizKind) -> None:
    if item.kind is not kind:
        raise InvalidKindError(
            f"Cannot store a {item.kind.tag} item in a {kind} deck"
        )


# ---------- Row operations ----------

def parse_deck(conn: sqlite3.Connection, kind: QuizKind) -> List[Item]:
    """
    Read every row of the deck, in whatever order SQLite returns them.
    Raises NoRowsError if the deck has no rows; a row that cannot be decoded
    aborts the whole scan.
    """
    cursor = conn.execute(f"SELECT {_select_columns(kind)} FROM cards")
    rows = cursor.fetchall()
    cursor.close()

    items: List[Item] = [_row_to_item(kind, row) for row in rows]
    if not items:
        raise NoRowsError("Deck has no cards")
    return items


def insert_item(conn: sqlite3.Connection, item: Item) -> int:
    """
    Insert a new row and return the id SQLite assigned to it.
    item.id is ignored.
    """
    if isinstance(item, MCQItem):
        sql = "INSERT INTO cards (question, answer, options) VALUES (?, ?, ?)"
        params = (item.question, item.answer, encode_options(item.options))
    else:
        sql = "INSERT INTO cards (question, answer) VALUES (?, ?)"
        params = (item.question, item.answer)

    try:
        cursor = conn.execute(sql, params)
    except sqlite3.Error as e:
        logger.debug("Insert into cards failed: %s", e)
        raise StatementError() from None
    conn.commit()
    return cursor.lastrowid


def retrieve_item(conn: sqlite3.Connection, kind: QuizKind, row_id: int) -> Item:
    cursor = conn.execute(
        f"SELECT {_select_columns(kind)} FROM cards WHERE rowid = ?",
        (row_id,),
    )
    row = cursor.fetchone()
    cursor.close()
    if row is None:
        raise NotFoundError(row_id)
    return _row_to_item(kind, row)


def _execute_single_row(conn: sqlite3.Connection, sql: str, params: tuple, row_id) -> None:
    """
    Run an UPDATE/DELETE addressed by rowid. Binding and constraint failures
    become StatementError, as in insert_item; other engine errors propagate.
    """
    try:
        cursor = conn.execute(sql, params)
    except (sqlite3.ProgrammingError, sqlite3.InterfaceError, sqlite3.IntegrityError) as e:
        logger.debug("Could not bind statement %r: %s", sql, e)
        raise StatementError("Error preparing statement") from None
    conn.commit()
    # The statement ran fine, but if nothing matched the id is unknown
    if cursor.rowcount == 0:
        raise NotFoundError(row_id)


def update_item(conn: sqlite3.Connection, item: Item) -> None:
    """
    Overwrite every field of the row item.id with the values in item.
    """
    if isinstance(item, MCQItem):
        _execute_single_row(
            conn,
            "UPDATE cards SET question = ?, answer = ?, options = ? WHERE rowid = ?",
            (item.question, item.answer, encode_options(item.options), item.id),
            item.id,
        )
    else:
        _execute_single_row(
            conn,
            "UPDATE cards SET question = ?, answer = ? WHERE rowid = ?",
            (item.question, item.answer, item.id),
            item.id,
        )


def delete_item(conn: sqlite3.Connection, row_id: int) -> None:
    _execute_single_row(conn, "DELETE FROM cards WHERE rowid = ?", (row_id,), row_id)


# ---------- Deck handle ----------

class Deck:
    """
    An open deck file. Use as a context manager or call close() when done.
    """

    def __init__(self, conn: sqlite3.Connection, kind: QuizKind, path: Path):
        self.conn = conn
        self.kind = kind
        self.path = path

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self.conn.close()

    def parse(self) -> List[Item]:
        return parse_deck(self.conn, self.kind)

    def insert(self, item: Item) -> int:
        _require_kind(item, self.kind)
        row_id = insert_item(self.conn, item)
        logger.debug("Inserted card %s into %s", row_id, self.path.name)
        return row_id

    def retrieve(self, row_id: int) -> Item:
        return retrieve_item(self.conn, self.kind, row_id)

    def update(self, item: Item) -> None:
        _require_kind(item, self.kind)
        update_item(self.conn, item)
        logger.debug("Updated card %s in %s", item.id, self.path.name)

    def delete(self, row_id: int) -> None:
        delete_item(self.conn, row_id)
        logger.debug("Deleted card %s from %s", row_id, self.path.name)


# ---------- Deck store ----------

class DeckStore:
    """
    All decks under one storage directory.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def create_deck(self, name: str, kind: QuizKind) -> Path:
        """
        Create an empty deck file with the table layout for `kind`.
        Raises AlreadyExistsError if the file is already there. The file is
        closed again; use open_deck() to work with it.
        """
        path = deck_path(self.root, name, kind)
        if path.exists():
            raise AlreadyExistsError(path)

        conn = get_connection(path)
        try:
            conn.execute(SCHEMAS[kind])
            conn.commit()
        except sqlite3.Error as e:
            # connect() already created the file; don't leave a tableless deck behind
            conn.close()
            path.unlink(missing_ok=True)
            raise SchemaError(f"Could not create cards table in {path}: {e}") from e
        finally:
            conn.close()

        logger.debug("Created %s deck %s", kind, path)
        return path

    def open_deck(self, file_name: Union[str, Path]) -> Deck:
        """
        Open and validate an existing deck. The kind comes from the file name,
        so an unknown prefix fails before the file is touched. A file whose
        cards table does not match its kind raises IllegalDeckError and is
        closed again.
        """
        kind = classify(file_name)
        path = self.root / Path(file_name).name
        conn = get_connection(path, must_exist=True)

        try:
            columns = _table_columns(conn)
        except sqlite3.DatabaseError as e:
            conn.close()
            raise IllegalDeckError(path) from e
        if columns - {"id"} != set(kind.columns):
            conn.close()
            raise IllegalDeckError(path)

        logger.debug("Opened %s deck %s", kind, path)
        return Deck(conn, kind, path)

    def list_decks(self) -> List[str]:
        """
        File names of every *.db file in the root, sorted. Names are not
        validated here; open_deck() does that.
        """
        return sorted(
            p.name for p in self.root.iterdir()
            if p.is_file() and p.suffix == DECK_SUFFIX
        )

    def load_all(self) -> List[Tuple[str, List[Item]]]:
        """
        Open and parse every deck in the root. Decks that fail (bad name,
        illegal schema, no cards) are logged and skipped.
        """
        loaded = []
        for file_name in self.list_decks():
            try:
                with self.open_deck(file_name) as deck:
                    loaded.append((file_name, deck.parse()))
            except (DeckError, sqlite3.Error) as e:
                logger.warning("Skipping deck %s: %s", file_name, e)
        return loaded
