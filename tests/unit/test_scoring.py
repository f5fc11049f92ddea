"""Tests for exact-match scoring."""

import itertools

import pytest

from quizgen.schemas.quiz import GeneratedQuiz
from quizgen.services.scoring import score
from tests.conftest import make_quiz_payload


@pytest.fixture
def questions():
    return GeneratedQuiz.model_validate(make_quiz_payload(correct=("A", "B", "C", "C", "D"))).questions


def test_solar_system_scenario(questions):
    answers = {"q1": "A", "q2": "B", "q3": "A", "q4": "C", "q5": "D"}
    assert score(questions, answers) == 4


def test_all_correct(questions):
    assert score(questions, {q.id: q.correct for q in questions}) == 5


def test_empty_answers_score_zero(questions):
    assert score(questions, {}) == 0


def test_unanswered_questions_contribute_nothing(questions):
    assert score(questions, {"q1": "A", "q5": "D"}) == 2


def test_extra_keys_are_ignored(questions):
    answers = {"q1": "A", "q2": "B", "q3": "A", "q4": "C", "q5": "D"}
    answers.update({"q6": "A", "stale-id": "B", "Q1": "A"})
    assert score(questions, answers) == 4


def test_answer_order_is_irrelevant(questions):
    answers = {"q5": "D", "q3": "C", "q1": "A"}
    assert score(questions, answers) == score(questions, dict(reversed(list(answers.items())))) == 3


def test_labels_are_case_sensitive(questions):
    assert score(questions, {"q1": "a"}) == 0


def test_bounded_by_question_count(questions):
    for combo in itertools.product("ABCD", repeat=5):
        answers = {f"q{i}": label for i, label in enumerate(combo, start=1)}
        result = score(questions, answers)
        assert 0 <= result <= 5
        assert result == sum(1 for q in questions if answers[q.id] == q.correct)
