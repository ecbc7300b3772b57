from fastapi import APIRouter, Depends

from app.dependencies import get_answer_service
from app.schemas import AnswerCreate, AnswerResponse, DeleteResponse
from app.services.answer_service import AnswerService, answer_from_payload

router = APIRouter(prefix="/api/v1/answers", tags=["answers"])

@router.get("", response_model=list[AnswerResponse])
async def list_answers(service: AnswerService = Depends(get_answer_service)):
    return await service.list()

@router.get("/{answer_id}", response_model=AnswerResponse)
async def get_answer(answer_id: int, service: AnswerService = Depends(get_answer_service)):
    return await service.get(answer_id)

@router.post("", status_code=201, response_model=AnswerResponse)
async def create_answer(data: AnswerCreate, service: AnswerService = Depends(get_answer_service)):
    return await service.create(answer_from_payload(data))

@router.put("/{answer_id}", response_model=AnswerResponse)
async def update_answer(answer_id: int, data: AnswerCreate, service: AnswerService = Depends(get_answer_service)):
    return await service.update(answer_id, answer_from_payload(data))

@router.delete("/{answer_id}", response_model=DeleteResponse)
async def delete_answer(answer_id: int, service: AnswerService = Depends(get_answer_service)):
    await service.delete(answer_id)
    return DeleteResponse(message=f"Answer with id : {answer_id} deleted")
