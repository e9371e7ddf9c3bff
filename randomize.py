import random
from dataclasses import replace
from typing import List, Optional

from models import Option, Question


def randomize_question_options(question: Question, rng: Optional[random.Random] = None) -> Question:
    """Shuffle options and relabel them A, B, C... by position.

    The correct answer follows the same option object, so the returned
    question still points at the right content. Questions without a valid
    answer are shuffled and stay unanswered.
    """
    rng = rng or random.Random()
    correct = next((o for o in question.options if o.letter == question.correct_answer), None)

    shuffled = list(question.options)
    rng.shuffle(shuffled)

    new_options = [Option(chr(ord("A") + i), o.text) for i, o in enumerate(shuffled)]
    new_answer = ""
    if correct is not None:
        idx = next(i for i, o in enumerate(shuffled) if o is correct)
        new_answer = new_options[idx].letter

    return replace(question, options=new_options, correct_answer=new_answer)


def randomize_all_options(questions: List[Question], rng: Optional[random.Random] = None) -> List[Question]:
    rng = rng or random.Random()
    return [randomize_question_options(q, rng) for q in questions]
