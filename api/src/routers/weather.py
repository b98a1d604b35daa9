"""
Weather mood router.

Translates weather data into an outfit mood.
"""

import structlog
from fastapi import APIRouter, Depends, status

from api.src.dependencies import get_weather_mood_service
from api.src.models.errors import ErrorResponse
from api.src.models.weather import WeatherMoodResponse, WeatherRequest
from api.src.services.weather_mood_service import WeatherMoodService
from shared.metrics import get_metrics

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["Weather"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing or blank fields"}
    }
)


@router.post(
    "/weather-mood",
    response_model=WeatherMoodResponse,
    status_code=status.HTTP_200_OK,
    summary="Outfit Mood"
)
async def get_outfit_mood(
    weather_request: WeatherRequest,
    weather_mood_service: WeatherMoodService = Depends(get_weather_mood_service)
) -> WeatherMoodResponse:
    """
    Translate weather data into an outfit mood.

    Args:
        weather_request: Temperature in Celsius and the weather condition

    Returns:
        The suggested outfit mood
    """
    logger.info(
        "weather_mood_requested",
        temperature=weather_request.temperature,
        condition=weather_request.condition
    )

    try:
        mood = weather_mood_service.determine_outfit_mood(weather_request)
    except Exception as e:
        logger.error("weather_mood_failed", error=str(e), exc_info=True)
        raise

    logger.info("outfit_mood_generated", mood=mood)
    get_metrics().moods_computed.labels(mood=mood).inc()

    return WeatherMoodResponse(mood=mood)
