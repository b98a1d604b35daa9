"""
Greeting router.

Serves a random greeting from a fixed list.
"""

import random
from fastapi import APIRouter, status

from api.src.models.greeting import GreetingResponse

GREETINGS = ("Hi!", "Hello", "Hey there!", "Greetings!", "Howdy!")

router = APIRouter(tags=["Greetings"])


@router.get(
    "/greetings",
    response_model=GreetingResponse,
    status_code=status.HTTP_200_OK,
    summary="Random Greeting"
)
async def get_random_greeting() -> GreetingResponse:
    """Return one of the fixed greetings, chosen uniformly at random."""
    return GreetingResponse(message=random.choice(GREETINGS))
