from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Sequence, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.config import settings
from app.database import Base

# Identifiers are assigned explicitly by the store from the entity's named
# sequence; the ``Sequence`` on each primary key only declares it so that
# ``create_all`` / alembic create it on PostgreSQL.

# Identifier columns are 32-bit INTEGER on every backend.
ID_MAX = 2**31 - 1


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"
    __sequence_name__ = settings.USERS_SEQUENCE

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_users_name_not_blank"),
        CheckConstraint("length(trim(password)) > 0", name="ck_users_password_not_blank"),
    )

    id: Mapped[int] = mapped_column(
        Integer, Sequence(settings.USERS_SEQUENCE), primary_key=True, autoincrement=False
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)


# ---------------------------------------------------------------------------
# Question
# ---------------------------------------------------------------------------
class Question(Base):
    __tablename__ = "questions"
    __sequence_name__ = settings.QUESTIONS_SEQUENCE

    __table_args__ = (
        CheckConstraint("length(trim(question)) > 0", name="ck_questions_question_not_blank"),
    )

    id: Mapped[int] = mapped_column(
        Integer, Sequence(settings.QUESTIONS_SEQUENCE), primary_key=True, autoincrement=False
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)

    # Foreign key; existence is checked by the database only
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )


# ---------------------------------------------------------------------------
# Answer
# ---------------------------------------------------------------------------
class Answer(Base):
    __tablename__ = "answers"
    __sequence_name__ = settings.ANSWERS_SEQUENCE

    __table_args__ = (
        CheckConstraint("length(trim(answer)) > 0", name="ck_answers_answer_not_blank"),
    )

    id: Mapped[int] = mapped_column(
        Integer, Sequence(settings.ANSWERS_SEQUENCE), primary_key=True, autoincrement=False
    )
    answer: Mapped[str] = mapped_column(Text, nullable=False)

    # Foreign keys
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("questions.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )


# ---------------------------------------------------------------------------
# IdSequence: sequence storage for databases without native sequences
# ---------------------------------------------------------------------------
class IdSequence(Base):
    __tablename__ = "id_sequences"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
