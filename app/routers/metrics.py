from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.models import Answer, Question, User
from app.schemas import MetricsResponse
from app.sequencer import sequencer_for
from app.services.lifecycle import compensation_stats

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])

@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):

    total_users = (await db.execute(select(func.count()).select_from(User))).scalar_one()

    total_questions = (await db.execute(select(func.count()).select_from(Question))).scalar_one()

    total_answers = (await db.execute(select(func.count()).select_from(Answer))).scalar_one()

    sequencer = sequencer_for(db)
    sequences = {
        model.__sequence_name__: await sequencer.current_value(model.__sequence_name__)
        for model in (User, Question, Answer)
    }

    return MetricsResponse(
        total_users=total_users,
        total_questions=total_questions,
        total_answers=total_answers,
        sequences=sequences,
        compensation={
            "resets": compensation_stats.resets,
            "failures": compensation_stats.failures,
        },
    )
