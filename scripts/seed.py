"""Database seeder for the Q&A API.

Rows are created through the lifecycle services so ids come from the
sequences exactly as they would for API traffic.
"""
import asyncio
import argparse
import random
import time

from app.database import engine, async_session, Base
from app.models import Answer, Question, User
from app.services.answer_service import AnswerService
from app.services.question_service import QuestionService
from app.services.user_service import UserService

TOPICS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "testing",
          "asyncio", "alembic", "pydantic", "performance"]


async def seed(small: bool = False):
    num_users = 5 if small else 50
    num_questions = 20 if small else 1000
    max_answers_per_question = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_questions} questions, "
          f"up to {max_answers_per_question} answers each")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users_svc = UserService.for_session(session)
        questions_svc = QuestionService.for_session(session)
        answers_svc = AnswerService.for_session(session)

        users = []
        for i in range(num_users):
            users.append(await users_svc.create(User(
                name=f"user_{i:04d}",
                password=f"password_{i:04d}",
                email=f"user_{i:04d}@example.com",
                phone=f"+99{random.randint(10**9, 10**10 - 1)}",
            )))
        print(f"  Created {len(users)} users")

        total_answers = 0
        for i in range(num_questions):
            question = await questions_svc.create(Question(
                question=f"Question {i}: how do I get started with {random.choice(TOPICS)}?",
                user_id=random.choice(users).id,
            ))
            for _ in range(random.randint(0, max_answers_per_question)):
                await answers_svc.create(Answer(
                    answer=f"Start with the official {random.choice(TOPICS)} tutorial.",
                    question_id=question.id,
                    user_id=random.choice(users).id,
                ))
                total_answers += 1

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Questions: {num_questions}")
    print(f"  Answers: {total_answers}")


def main():
    parser = argparse.ArgumentParser(description="Seed the Q&A database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (20 questions)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
