from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from app.models import ID_MAX


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NotBlank = Annotated[str, AfterValidator(_not_blank)]

# Reference to another entity; must fit the 32-bit identifier column.
EntityRef = Annotated[int, Field(ge=1, le=ID_MAX)]


# --- User ---

class UserCreate(BaseModel):
    name: NotBlank
    password: NotBlank
    email: EmailStr
    phone: str | None = None


class UserResponse(BaseModel):
    # password is write-only
    id: int
    name: str
    email: str
    phone: str | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Question ---

class QuestionCreate(BaseModel):
    question: NotBlank
    user_id: EntityRef


class QuestionResponse(BaseModel):
    id: int
    question: str
    user_id: int
    model_config = ConfigDict(from_attributes=True)


# --- Answer ---

class AnswerCreate(BaseModel):
    answer: NotBlank
    question_id: EntityRef
    user_id: EntityRef


class AnswerResponse(BaseModel):
    id: int
    answer: str
    question_id: int
    user_id: int
    model_config = ConfigDict(from_attributes=True)


# --- Responses shared by all resources ---

class DeleteResponse(BaseModel):
    message: str


class ServiceErrorBody(BaseModel):
    code: str
    message: str


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_questions: int
    total_answers: int
    sequences: dict[str, int] = {}
    compensation: dict[str, int] = {}
