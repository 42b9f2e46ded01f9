"""
Custom exceptions for the Campus Life application.
Routers translate these into HTTP errors; the message is what the client sees.
"""
from campus_life.constants import (
    MSG_ALREADY_CHECKED_IN,
    MSG_INVALID_CREDENTIALS,
    MSG_MISSION_NOT_FOUND,
    MSG_UNAUTHORIZED,
    MSG_USER_EXISTS,
    MSG_USER_NOT_FOUND,
)


class CampusLifeException(Exception):
    """Base exception for Campus Life application"""
    pass


class UserNotFoundException(CampusLifeException):
    """Raised when a user is not found"""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(MSG_USER_NOT_FOUND)


class MissionNotFoundException(CampusLifeException):
    """Raised when a mission does not exist or belongs to another user"""
    def __init__(self, mission_id: int):
        self.mission_id = mission_id
        super().__init__(MSG_MISSION_NOT_FOUND)


class UnauthorizedAccessException(CampusLifeException):
    """Raised when the caller acts on a resource owned by someone else"""
    def __init__(self, caller_id: int, owner_id):
        self.caller_id = caller_id
        self.owner_id = owner_id
        super().__init__(MSG_UNAUTHORIZED)


class DuplicateCheckinException(CampusLifeException):
    """Raised when the user has already checked in on this calendar day"""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(MSG_ALREADY_CHECKED_IN)


class UserAlreadyExistsException(CampusLifeException):
    """Raised when email or username is already taken"""
    def __init__(self, email: str, username: str):
        self.email = email
        self.username = username
        super().__init__(MSG_USER_EXISTS)


class InvalidCredentialsException(CampusLifeException):
    """Raised when login fails"""
    def __init__(self):
        super().__init__(MSG_INVALID_CREDENTIALS)


class ValidationException(CampusLifeException):
    """Raised when request data is incomplete"""
    def __init__(self, message: str):
        super().__init__(message)


class DatabaseException(CampusLifeException):
    """Raised when database operations fail"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"{operation} failed")
