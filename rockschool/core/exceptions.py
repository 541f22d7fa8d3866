# rockschool/core/exceptions.py
"""Custom exceptions for the Rock School application."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class RockSchoolException(HTTPException):
    """Base exception for Rock School application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(RockSchoolException):
    """Resource not found exception"""
    def __init__(self, resource: str, id: Optional[str] = None):
        message = f"{resource} not found"
        if id:
            message += f" with id: {id}"
        self.message = message
        super().__init__(status_code=404, detail=message)


class PersistenceError(RockSchoolException):
    """Raised when the store fails a read or a write transaction.

    Always fatal for the request: the transaction has already been rolled back
    and nothing is retried.
    """
    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        detail = {"error": "Database Error", "message": message}
        if operation:
            detail["operation"] = operation
        super().__init__(status_code=500, detail=detail)
