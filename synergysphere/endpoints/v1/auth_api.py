from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from synergysphere.auth.auth_utils import create_access_token, hash_password, verify_password
from synergysphere.constants import ErrorMessages, SuccessMessages
from synergysphere.database.session import get_db
from synergysphere.enums import ErrorCode
from synergysphere.exceptions import raise_email_exists, raise_unauthorized
from synergysphere.models import User
from synergysphere.schemas import ChangePasswordRequest, LoginRequest, RegisterRequest
from synergysphere.utils.common import get_object_or_404
from synergysphere.utils.deps import APIContext
from synergysphere.utils.logger import get_logger
from synergysphere.utils.serializers import user_to_dict

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/register", status_code=201)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Creates an account and returns it together with a bearer token.
    """
    if db.query(User).filter(User.email == data.email).first():
        raise_email_exists()

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        full_name=data.full_name,
    )
    db.add(user)
    db.flush()
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return {"user": user_to_dict(user), "token": create_access_token(user)}

@router.post("/login")
def login(
    data: LoginRequest,
    db: Session = Depends(get_db)
):
    user = db.query(User).filter(User.email == data.email).first()
    if not user or not user.is_active or not verify_password(data.password, user.password_hash):
        raise_unauthorized(ErrorMessages.INVALID_CREDENTIALS)

    return {"user": user_to_dict(user), "token": create_access_token(user)}

@router.get("/me")
def get_me(ctx: APIContext = Depends()):
    """
    Returns the profile of the token holder.
    """
    user = get_object_or_404(ctx.db, User, ctx.user.id, ErrorMessages.USER_NOT_FOUND, ErrorCode.USER_NOT_FOUND)
    return {"user": user_to_dict(user)}

@router.patch("/password")
def change_password(
    data: ChangePasswordRequest,
    ctx: APIContext = Depends()
):
    user = get_object_or_404(ctx.db, User, ctx.user.id, ErrorMessages.USER_NOT_FOUND, ErrorCode.USER_NOT_FOUND)

    if not verify_password(data.current_password, user.password_hash):
        raise_unauthorized(ErrorMessages.INVALID_CURRENT_PASSWORD)

    user.password_hash = hash_password(data.new_password)
    return {"message": SuccessMessages.PASSWORD_UPDATED}
