"""
Base service interface for business logic.
"""

from abc import ABC, abstractmethod

from ..utils import Clock


class BaseService(ABC):
    """Abstract base service interface."""

    def __init__(self, repository=None, clock: Clock = None):
        """Initialize service with repository and clock dependencies."""
        self.repository = repository
        self.clock = clock or Clock()

    @abstractmethod
    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters."""
        pass
