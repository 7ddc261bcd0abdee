# decks.py
"""
Deck addressing: maps (name, kind) to a file under the storage root and a
file name back to its kind.

Deck files are named <TAG>_<name>.db where TAG is CRD (flashcards) or MCQ
(multiple choice). Nothing here touches the filesystem.
"""
from pathlib import Path
from typing import Union

from errors import InvalidDeckNameError
from models import QuizKind

DECK_SUFFIX = ".db"

_PREFIXES = {
    "CRD_": QuizKind.FLASHCARD,
    "MCQ_": QuizKind.MULTIPLE_CHOICE,
}


def deck_file_name(name: str, kind: QuizKind) -> str:
    # kind.tag raises InvalidKindError for UNSPECIFIED
    return f"{kind.tag}_{name}{DECK_SUFFIX}"


def deck_path(root: Union[str, Path], name: str, kind: QuizKind) -> Path:
    return Path(root) / deck_file_name(name, kind)


def classify(file_name: Union[str, Path]) -> QuizKind:
    """
    Returns the kind encoded in the first 4 characters of the file name.
    Matching is exact and case-sensitive; anything shorter than the prefix
    or with another prefix raises InvalidDeckNameError.
    """
    base = Path(file_name).name
    kind = _PREFIXES.get(base[:4])
    if kind is None:
        raise InvalidDeckNameError(base)
    return kind


def deck_name(file_name: Union[str, Path]) -> str:
    """'CRD_french.db' -> 'french'."""
    base = Path(file_name).name
    classify(base)
    stem = base[4:]
    if stem.endswith(DECK_SUFFIX):
        stem = stem[: -len(DECK_SUFFIX)]
    return stem
