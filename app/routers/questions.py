from fastapi import APIRouter, Depends

from app.dependencies import get_question_service
from app.schemas import DeleteResponse, QuestionCreate, QuestionResponse
from app.services.question_service import QuestionService, question_from_payload

router = APIRouter(prefix="/api/v1/questions", tags=["questions"])

@router.get("", response_model=list[QuestionResponse])
async def list_questions(service: QuestionService = Depends(get_question_service)):
    return await service.list()

@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    return await service.get(question_id)

@router.post("", status_code=201, response_model=QuestionResponse)
async def create_question(data: QuestionCreate, service: QuestionService = Depends(get_question_service)):
    return await service.create(question_from_payload(data))

@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    data: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
):
    return await service.update(question_id, question_from_payload(data))

@router.delete("/{question_id}", response_model=DeleteResponse)
async def delete_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    await service.delete(question_id)
    return DeleteResponse(message=f"Question with id : {question_id} deleted")
