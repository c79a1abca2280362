import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.dependencies import get_current_user
from taskboard.errors import DuplicateResource, ValidationFailed
from taskboard.models import User
from taskboard.schemas import AuthResponse, ProfileUpdate, Token, UserCreate, UserLogin, UserResponse
from taskboard.security import create_access_token, dummy_verify, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def authenticate(db: Session, email: str, password: str):
    """Return the user for these credentials, or None."""
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        dummy_verify()
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == user_in.email).first():
        raise DuplicateResource("User already exists")
    user = User(
        name=user_in.name,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise DuplicateResource("User already exists")
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return {"token": create_access_token(user.id), "user": user}


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    user = authenticate(db, credentials.email, credentials.password)
    if user is None:
        logger.info("Failed login for %s", credentials.email)
        raise ValidationFailed("Invalid email or password")
    logger.info("User %s logged in", user.id)
    return {"token": create_access_token(user.id), "user": user}


@router.post("/token", response_model=Token)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 password flow for the interactive docs; "username" carries the email
    user = authenticate(db, form_data.username, form_data.password)
    if user is None:
        raise ValidationFailed("Invalid email or password")
    return {"access_token": create_access_token(user.id), "token_type": "bearer"}


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.put("/profile", response_model=UserResponse)
def update_profile(profile: ProfileUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    for field, value in profile.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(current_user, field, value if value is not None else "")
    db.commit()
    db.refresh(current_user)
    logger.info("Updated profile of user %s", current_user.id)
    return {"user": current_user}
