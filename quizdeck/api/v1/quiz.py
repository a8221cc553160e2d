from fastapi import APIRouter, Depends

from quizdeck.schemas.res.question import QuestionResponse, QuizResponse
from quizdeck.services.quiz import QuizService

quiz_router = APIRouter()


@quiz_router.get("/quiz/{moduleName:path}", response_model=QuizResponse)
async def get_quiz(moduleName: str, quiz_service: QuizService = Depends(QuizService)):
    """Shuffled questions of a module"""
    questions = await quiz_service.get_quiz_questions(moduleName)
    return QuizResponse(
        moduleName=moduleName,
        questions=[QuestionResponse.from_document(q) for q in questions],
    )
