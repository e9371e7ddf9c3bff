import random

from models import Option, Question
from randomize import randomize_all_options, randomize_question_options


def _question(answer="B"):
    return Question(
        id=1,
        question_number=1,
        text="What is the capital of France?",
        options=[Option("A", "London"), Option("B", "Paris"), Option("C", "Berlin"), Option("D", "Rome")],
        correct_answer=answer,
    )


def test_answer_follows_option_content():
    original = _question()
    for seed in range(20):
        shuffled = randomize_question_options(original, random.Random(seed))
        assert [o.letter for o in shuffled.options] == ["A", "B", "C", "D"]
        assert sorted(o.text for o in shuffled.options) == ["Berlin", "London", "Paris", "Rome"]
        correct = next(o for o in shuffled.options if o.letter == shuffled.correct_answer)
        assert correct.text == "Paris"


def test_original_question_untouched():
    original = _question()
    randomize_question_options(original, random.Random(1))
    assert [o.text for o in original.options] == ["London", "Paris", "Berlin", "Rome"]
    assert original.correct_answer == "B"


def test_unanswered_question_stays_unanswered():
    for answer in ("", "E"):
        shuffled = randomize_question_options(_question(answer), random.Random(0))
        assert shuffled.correct_answer == ""
        assert len(shuffled.options) == 4


def test_randomize_all_options():
    questions = [_question(), _question("")]
    result = randomize_all_options(questions, random.Random(5))
    assert len(result) == 2
    assert result[0].correct_answer
    assert result[1].correct_answer == ""
