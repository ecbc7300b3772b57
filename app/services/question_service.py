"""
Question service: lifecycle operations for the Question kind.

``user_id`` is not checked here; a dangling owner is rejected by the
``questions.user_id`` foreign key and surfaces as ``ConstraintViolation``.
"""
from app.models import Question
from app.schemas import QuestionCreate
from app.services.lifecycle import EntityService


class QuestionService(EntityService[Question]):
    model = Question
    kind = "Question"


def question_from_payload(data: QuestionCreate) -> Question:
    return Question(question=data.question, user_id=data.user_id)
