# errors.py
"""
Exceptions raised by the deck storage engine.

sqlite3 errors that are not translated here (missing file, disk I/O, closed
connection) propagate to the caller unchanged.
"""


class DeckError(Exception):
    """Base class for every deck storage failure."""


class InvalidKindError(DeckError):
    """A deck was addressed with a kind that has no CRD/MCQ tag."""


class InvalidDeckNameError(InvalidKindError):
    """A file name does not start with CRD_ or MCQ_."""

    def __init__(self, file_name: str):
        super().__init__(f"Invalid deck type for '{file_name}'! Must be MCQ or CRD")
        self.file_name = file_name


class AlreadyExistsError(DeckError):
    def __init__(self, path):
        super().__init__(f"Quiz already exists: {path}")
        self.path = path


class IllegalDeckError(DeckError):
    """The file opened but its cards table is missing, corrupt or the wrong shape."""

    def __init__(self, path):
        super().__init__(f"Illegal deck: {path}")
        self.path = path


class SchemaError(DeckError):
    pass


class NoRowsError(DeckError):
    """A full deck scan produced no items."""


class NotFoundError(DeckError):
    def __init__(self, row_id):
        super().__init__(f"Card not found: id={row_id}")
        self.row_id = row_id


class StatementError(DeckError):
    def __init__(self, message: str = "Error in preparing statement"):
        super().__init__(message)


class RowDecodeError(DeckError, ValueError):
    """A stored row has a NULL where the item needs text."""

    def __init__(self, row_id):
        super().__init__(f"cards row {row_id} has an empty column")
        self.row_id = row_id
