"""API routers, one per endpoint group."""

from api.src.routers import dad_jokes, greetings, names, weather

ALL_ROUTERS = (
    greetings.router,
    dad_jokes.router,
    names.router,
    weather.router,
)

__all__ = ["ALL_ROUTERS"]
