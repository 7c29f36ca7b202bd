"""Authentication endpoints (API JWT)."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import create_access_token, get_current_user, get_password_hash, verify_password
from scoop_pos.db.session import get_db
from scoop_pos.models.user import User, normalize_user_role
from scoop_pos.schemas.auth import AuthUserResponse, LoginRequest, RegisterRequest, TokenResponse
from scoop_pos.services.user_service import create_user, get_user_by_username

router: APIRouter = APIRouter()


@router.post("/register", response_model=AuthUserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> AuthUserResponse:
    try:
        role = normalize_user_role(payload.role)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if get_user_by_username(db=db, username=payload.username) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already registered")
    user = create_user(
        db=db,
        username=payload.username,
        hashed_password=get_password_hash(payload.password),
        role=role,
        full_name=payload.full_name,
    )
    return AuthUserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user: User | None = get_user_by_username(db=db, username=payload.username)
    if user is None or not user.is_active or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")
    return TokenResponse(access_token=create_access_token(data={"sub": str(user.id)}))


@router.get("/me", response_model=AuthUserResponse)
def me(current_user: User = Depends(get_current_user)) -> AuthUserResponse:
    return AuthUserResponse.model_validate(current_user)
