from typing import Mapping, Sequence

from quizgen.schemas.quiz import Question


def score(questions: Sequence[Question], answers: Mapping[str, str]) -> int:
    """Count the questions whose submitted label equals the correct one.

    Iterates the quiz's own questions, so unanswered questions and answer
    keys that match no question simply contribute nothing.
    """
    return sum(1 for question in questions if answers.get(question.id) == question.correct)
