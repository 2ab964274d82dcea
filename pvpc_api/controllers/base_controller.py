"""
Base controller interface for API endpoints.

This module provides the abstract base class for all API controllers of the
price service. It enforces consistent patterns and provides common error
handling across all endpoint handlers.

Tags:
    - base-controller
    - abstract-interface
    - error-handling

Architecture:
    All controllers inherit from BaseController and must implement
    _setup_routes(), which registers the endpoint handlers on self.router.

Usage:
    ```python
    class MyController(BaseController):
        def _setup_routes(self):
            @self.router.get("/my-endpoint")
            async def my_endpoint():
                return {"message": "Hello World"}
    ```
"""

import logging
from abc import ABC, abstractmethod
from fastapi import APIRouter, HTTPException
from typing import Optional

from ..exceptions import PriceServiceError


class BaseController(ABC):
    """
    Abstract base controller for consistent API endpoint patterns.

    Attributes:
        router (APIRouter): FastAPI router instance for endpoint registration

    Methods:
        _setup_routes(): Abstract method for route definition (must implement)
        handle_exception(): Standardized exception handling with context
    """

    def __init__(self):
        """
        Initialize controller with FastAPI router.

        Creates a new APIRouter instance and calls _setup_routes() to register
        all endpoint handlers defined by the concrete controller implementation.
        """
        self.router = APIRouter()
        self.logger = logging.getLogger(self.__class__.__module__)
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """Setup routes for this controller."""
        pass

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Handle exceptions consistently across all controllers.

        Service errors keep their own status and error code. Anything else is
        logged and reported as HTTP 500 with the context prepended.

        Args:
            e (Exception): The exception that occurred
            context (Optional[str]): Where the error occurred

        Raises:
            HTTPException: Always
        """
        if isinstance(e, PriceServiceError):
            raise HTTPException(
                status_code=e.status_code,
                detail={"code": e.code, "message": e.message},
            ) from e

        self.logger.error(f"❌ {context or 'Unhandled error'}: {e}")
        error_message = f"{context}: {str(e)}" if context else str(e)
        raise HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": error_message},
        ) from e
