"""One-question-at-a-time browsing over a subject's questions."""

from collections.abc import Sequence

from study_helper.domain.study.entities.question import Question


class QuestionDeck:
    """
    Cursor over a question list with answer reveal.

    Moving past either end wraps around. Every move hides the answer
    again. An empty deck has position -1 and no current question.
    """

    def __init__(self, questions: Sequence[Question] = ()) -> None:
        self._questions: list[Question] = list(questions)
        self._position = 0 if self._questions else -1
        self.answer_visible = False

    @property
    def questions(self) -> list[Question]:
        return list(self._questions)

    @property
    def position(self) -> int:
        return self._position

    @property
    def current(self) -> Question | None:
        if self._position < 0:
            return None
        return self._questions[self._position]

    def __len__(self) -> int:
        return len(self._questions)

    def show(self, index: int) -> Question | None:
        """
        Move to ``index``, wrapping out-of-range values.

        Below zero goes to the last question, past the end goes to the
        first one.
        """
        if not self._questions:
            self._position = -1
        elif index < 0:
            self._position = len(self._questions) - 1
        elif index >= len(self._questions):
            self._position = 0
        else:
            self._position = index
        self.answer_visible = False
        return self.current

    def next(self) -> Question | None:
        return self.show(self._position + 1)

    def previous(self) -> Question | None:
        return self.show(self._position - 1)

    def move_to_end(self) -> Question | None:
        """Position on the last question, e.g. right after adding one."""
        return self.show(len(self._questions) - 1)

    def toggle_answer(self) -> bool:
        """Flip answer visibility and return the new state."""
        if self.current is None:
            return False
        self.answer_visible = not self.answer_visible
        return self.answer_visible

    def replace(self, questions: Sequence[Question]) -> Question | None:
        """Swap in a refreshed question list, keeping the position when still valid."""
        self._questions = list(questions)
        return self.show(max(self._position, 0))

    def title(self, subject_text: str) -> str:
        return f"{subject_text} ({self._position + 1} of {len(self._questions)})"
