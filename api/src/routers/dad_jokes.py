"""
Dad joke router.

Serves a random dad joke from the database.
"""

import structlog
from fastapi import APIRouter, Depends, status

from api.src.dependencies import get_joke_repository
from api.src.models.errors import AppError, ErrorKind, ErrorResponse
from api.src.models.joke import DadJokeResponse
from api.src.repositories.joke_repo import DadJokeRepository
from shared.metrics import get_metrics

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["Dad Jokes"],
    responses={
        404: {"model": ErrorResponse, "description": "No jokes stored"}
    }
)


@router.get(
    "/dad-jokes",
    response_model=DadJokeResponse,
    status_code=status.HTTP_200_OK,
    summary="Random Dad Joke",
    description="""
    Return a random dad joke from the database.

    **Success Response (200):**
    - joke: Joke text

    **Error Responses:**
    - 404: The joke table is empty
    """
)
async def get_random_dad_joke(
    joke_repo: DadJokeRepository = Depends(get_joke_repository)
) -> DadJokeResponse:
    """
    Fetch one joke at random.

    Raises:
        AppError: NOT_FOUND if no jokes are stored
    """
    joke = await joke_repo.find_random_joke()

    if joke is None:
        logger.warning("dad_joke_not_available")
        raise AppError(ErrorKind.NOT_FOUND, "No dad jokes found in the database")

    logger.info("dad_joke_served", joke_id=joke.id, length=len(joke.joke_text))
    get_metrics().jokes_served.inc()

    return DadJokeResponse(joke=joke.joke_text)
