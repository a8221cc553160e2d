from fastapi import APIRouter

from quizdeck.api.v1.module import module_router
from quizdeck.api.v1.quiz import quiz_router
from quizdeck.api.v1.score import score_router

api_router = APIRouter(prefix="/api")
api_router.include_router(module_router, tags=["modules"])
api_router.include_router(quiz_router, tags=["quiz"])
api_router.include_router(score_router, tags=["scores"])
