"""
Answer service: lifecycle operations for the Answer kind.

Both references (``question_id``, ``user_id``) are enforced by the
database only.
"""
from app.models import Answer
from app.schemas import AnswerCreate
from app.services.lifecycle import EntityService


class AnswerService(EntityService[Answer]):
    model = Answer
    kind = "Answer"


def answer_from_payload(data: AnswerCreate) -> Answer:
    return Answer(
        answer=data.answer,
        question_id=data.question_id,
        user_id=data.user_id,
    )
