from typing import List

from fastapi import APIRouter, Depends

from quizdeck.schemas.req.score import ScoreCreateDTO
from quizdeck.schemas.res.score import ScoreCreatedResponse, ScoreResponse
from quizdeck.services.score import ScoreService

score_router = APIRouter()


@score_router.post("/scores", status_code=201, response_model=ScoreCreatedResponse)
async def submit_score(score_data: ScoreCreateDTO, score_service: ScoreService = Depends(ScoreService)):
    """Save the result of a quiz attempt"""
    score = await score_service.submit_score(score_data)
    return ScoreCreatedResponse(message="Score saved successfully.", score=ScoreResponse.from_document(score))


@score_router.get("/scores", response_model=List[ScoreResponse])
async def get_scores(score_service: ScoreService = Depends(ScoreService)):
    return [ScoreResponse.from_document(s) for s in await score_service.get_all_scores()]
