"""
Name registration service.

Keeps the names registered during the lifetime of the process. Names are
compared exactly (case-sensitive) and never removed.
"""

import threading
import structlog
from typing import Set

from api.src.models.result import Failure, Result, Success

logger = structlog.get_logger(__name__)

NAME_ALREADY_EXISTS = "Name already exists"


class NameService:
    """In-memory registry guaranteeing each name is accepted at most once."""

    def __init__(self):
        self._names: Set[str] = set()
        self._lock = threading.Lock()

    def create_name(self, name: str) -> Result:
        """
        Register a name if it is not already taken.

        The membership check and the insert happen under one lock, so two
        concurrent registrations of the same name cannot both succeed.

        Args:
            name: Name to register

        Returns:
            Success, or Failure with reason "Name already exists"
        """
        logger.debug("name_create_attempt", name=name)

        with self._lock:
            if name in self._names:
                logger.info("name_already_exists", name=name)
                return Failure(NAME_ALREADY_EXISTS)
            self._names.add(name)

        logger.info("name_created", name=name)
        return Success()

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)
