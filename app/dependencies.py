"""
FastAPI dependencies that hand each request a lifecycle service bound to
the request's session.

Usage in a router::

    @router.get("/{question_id}")
    async def get_question(question_id: int, service: QuestionService = Depends(get_question_service)):
        ...
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.answer_service import AnswerService
from app.services.question_service import QuestionService
from app.services.user_service import UserService


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService.for_session(db)


def get_question_service(db: AsyncSession = Depends(get_db)) -> QuestionService:
    return QuestionService.for_session(db)


def get_answer_service(db: AsyncSession = Depends(get_db)) -> AnswerService:
    return AnswerService.for_session(db)
