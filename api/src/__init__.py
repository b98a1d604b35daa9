"""FastAPI service for the dad jokes demo.

This package provides REST API endpoints for random greetings, random dad
jokes, name registration and weather-based outfit moods.
"""

__version__ = "0.1.0"
