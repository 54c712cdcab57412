from fastapi import APIRouter, Depends

from synergysphere.constants import ErrorMessages
from synergysphere.enums import ErrorCode
from synergysphere.exceptions import raise_bad_request
from synergysphere.models import User
from synergysphere.schemas import UserUpdate
from synergysphere.utils.common import get_object_or_404, parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.filters import UserFilters
from synergysphere.utils.pagination import paginate
from synergysphere.utils.serializers import user_to_dict

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("")
def list_users(
    ctx: APIContext = Depends(),
    filters: UserFilters = Depends(),
    params: ListParams = Depends()
):
    """
    Directory search used when picking members and assignees.
    """
    query = (
        ctx.db.query(User)
        .filter(*filters.clauses())
        .order_by(User.full_name.asc(), User.id.asc())
    )
    return paginate(query, params.pagination, user_to_dict)

@router.patch("/me")
def update_my_profile(
    data: UserUpdate,
    ctx: APIContext = Depends()
):
    updates = data.model_dump(exclude_unset=True)
    if not updates:
        raise_bad_request(ErrorMessages.NO_FIELDS_TO_UPDATE)

    user = get_object_or_404(ctx.db, User, ctx.user.id, ErrorMessages.USER_NOT_FOUND, ErrorCode.USER_NOT_FOUND)
    for field, value in updates.items():
        setattr(user, field, value)
    ctx.db.flush()
    ctx.db.refresh(user)
    return user_to_dict(user)

@router.get("/{user_id}")
def get_user(
    user_id: str,
    ctx: APIContext = Depends()
):
    uid = parse_uuid(user_id, "userId")
    user = get_object_or_404(ctx.db, User, uid, ErrorMessages.USER_NOT_FOUND, ErrorCode.USER_NOT_FOUND)
    return user_to_dict(user)
