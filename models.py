# models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Option:
    letter: str     # A-E, uppercase
    text: str


@dataclass
class Question:
    """A single multiple-choice question extracted from a document."""
    id: int
    question_number: int
    text: str
    options: List[Option] = field(default_factory=list)
    correct_answer: str = ""            # "" when no answer signal was found
    explanation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question_number": self.question_number,
            "text": self.text,
            "options": [{"letter": o.letter, "text": o.text} for o in self.options],
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            id=int(data["id"]),
            question_number=int(data.get("question_number", data["id"])),
            text=data["text"],
            options=[Option(o["letter"], o["text"]) for o in data.get("options", [])],
            correct_answer=data.get("correct_answer") or "",
            explanation=data.get("explanation"),
        )
