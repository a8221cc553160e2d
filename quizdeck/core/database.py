import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from quizdeck.core.config import settings
from quizdeck.models.question import Question
from quizdeck.models.report import Report
from quizdeck.models.score import Score

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [
    Question,
    Score,
    Report,
]

client = None
db = None


async def init_db():
    global client, db
    client = AsyncIOMotorClient(settings.mongodb_uri)
    db = client.get_default_database(settings.default_db_name)
    await init_beanie(
        database=db,
        document_models=DOCUMENT_MODELS,
    )
    logger.info("Connected to MongoDB database '%s'", db.name)


def close_db():
    global client, db
    if client is not None:
        client.close()
    client = None
    db = None
