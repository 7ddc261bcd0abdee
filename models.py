from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from errors import InvalidKindError


class QuizKind(Enum):
    UNSPECIFIED = 0
    FLASHCARD = 1
    MULTIPLE_CHOICE = 2

    @property
    def tag(self) -> str:
        """On-disk 3-letter tag. UNSPECIFIED has none."""
        if self is QuizKind.FLASHCARD:
            return "CRD"
        if self is QuizKind.MULTIPLE_CHOICE:
            return "MCQ"
        raise InvalidKindError(f"Quiz kind {self.name} has no deck tag")

    @property
    def columns(self) -> Tuple[str, ...]:
        """Data columns of the cards table, in projection order (without id)."""
        if self is QuizKind.FLASHCARD:
            return ("question", "answer")
        if self is QuizKind.MULTIPLE_CHOICE:
            return ("question", "options", "answer")
        raise InvalidKindError(f"Quiz kind {self.name} has no table layout")

    def __str__(self) -> str:
        if self is QuizKind.UNSPECIFIED:
            return "Unknown"
        return self.tag


@dataclass(frozen=True)
class CardItem:
    id: int = 0
    question: str = ""
    answer: str = ""

    @property
    def kind(self) -> QuizKind:
        return QuizKind.FLASHCARD

    def is_empty(self) -> bool:
        return self == CardItem()


@dataclass(frozen=True)
class MCQItem:
    id: int = 0
    question: str = ""
    # The answer should be one of the options; callers are responsible for that.
    options: Tuple[str, ...] = ()
    answer: str = ""

    def __post_init__(self):
        # Accept any sequence (e.g. a list from a form) but store a tuple.
        if isinstance(self.options, str):
            raise TypeError("MCQItem options must be a sequence of strings, not a str")
        object.__setattr__(self, "options", tuple(self.options))

    @property
    def kind(self) -> QuizKind:
        return QuizKind.MULTIPLE_CHOICE

    def is_empty(self) -> bool:
        return self == MCQItem()


Item = Union[CardItem, MCQItem]


def empty_item(kind: QuizKind) -> Item:
    """
    Zero value for a kind. Callers can compare a result against it (or call
    is_empty()) as a secondary "nothing was read" signal.
    """
    if kind is QuizKind.FLASHCARD:
        return CardItem()
    if kind is QuizKind.MULTIPLE_CHOICE:
        return MCQItem()
    raise InvalidKindError(f"Quiz kind {kind.name} has no item type")
