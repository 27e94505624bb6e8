"""Orderings offered for the subject list."""

import string
from collections.abc import Callable, Iterable
from enum import Enum

from study_helper.domain.study.entities.subject import Subject


class SubjectSortOrder(Enum):
    """Subject list orderings, valued by their saved preference string."""

    ALPHABETIC = "alpha"
    NEW_FIRST = "new_first"
    OLD_FIRST = "old_first"

    @classmethod
    def from_preference(cls, preference: str | None) -> "SubjectSortOrder":
        """
        Map a saved preference to an order.

        A missing preference means alphabetic; any unrecognised value
        falls back to oldest first.
        """
        if preference is None or preference == cls.ALPHABETIC.value:
            return cls.ALPHABETIC
        if preference == cls.NEW_FIRST.value:
            return cls.NEW_FIRST
        return cls.OLD_FIRST


# Same folding as SQLite lower(), which leaves non-ASCII letters alone
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _fold(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _alphabetic_key(subject: Subject) -> tuple[str, str, int, int]:
    return (_fold(subject.text), subject.text, subject.update_time, subject.id.value)


def _new_first_key(subject: Subject) -> tuple[int, str, str, int]:
    return (-subject.update_time, _fold(subject.text), subject.text, subject.id.value)


def _old_first_key(subject: Subject) -> tuple[int, str, str, int]:
    return (subject.update_time, _fold(subject.text), subject.text, subject.id.value)


_SORT_KEYS: dict[SubjectSortOrder, Callable[[Subject], tuple]] = {
    SubjectSortOrder.ALPHABETIC: _alphabetic_key,
    SubjectSortOrder.NEW_FIRST: _new_first_key,
    SubjectSortOrder.OLD_FIRST: _old_first_key,
}


def sort_subjects(subjects: Iterable[Subject], order: SubjectSortOrder) -> list[Subject]:
    """
    Return subjects sorted by the given order.

    Every order is total (ties fall through to text, then time, then id),
    so re-sorting never depends on the incoming sequence.
    """
    return sorted(subjects, key=_SORT_KEYS[order])
