"""
Registration and login routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_life.database import get_db
from campus_life.exceptions import (
    DatabaseException,
    InvalidCredentialsException,
    UserAlreadyExistsException,
    ValidationException,
)
from campus_life.schemas import AuthResponse, LoginRequest, RegisterRequest
from campus_life.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account with the default daily missions"""
    try:
        user, token = UserService(db).register(data)
    except (ValidationException, UserAlreadyExistsException) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return AuthResponse(token=token, user_id=user.id, message="Registration successful")


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a token"""
    try:
        user, token = UserService(db).login(data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCredentialsException as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return AuthResponse(token=token, user_id=user.id, message="Login successful")
