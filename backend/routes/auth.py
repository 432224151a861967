import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from core.database import get_session
from core.exceptions import UnauthenticatedError, ValidationError
from models.user import User, UserRole
from repositories.user_repository import UserRepository
from schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from utils.security import create_access_token, get_current_user, hash_password, verify_password

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


# Self-registration always creates a student; admins come from seed_admin.py
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, session: Session = Depends(get_session)):
    users = UserRepository(session)
    if users.find_by_email(payload.email):
        raise ValidationError("User already exists")

    user = users.insert(
        User(
            name=payload.name.strip(),
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=UserRole.student,
        )
    )
    logger.info("Registered student %s", user.id)
    return {"token": create_access_token(user), "user": user}


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, session: Session = Depends(get_session)):
    user = UserRepository(session).find_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise UnauthenticatedError("Invalid credentials")

    return {"token": create_access_token(user), "user": user}


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
