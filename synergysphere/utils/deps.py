from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from synergysphere.auth.dependencies import AuthenticatedUser, get_current_user
from synergysphere.database.session import get_db
from synergysphere.exceptions import raise_unauthorized
from synergysphere.models import User
from synergysphere.utils.pagination import PageParams, parse_pagination

class APIContext:
    def __init__(
        self,
        db: Session = Depends(get_db),
        user: AuthenticatedUser = Depends(get_current_user)
    ):
        self.db = db
        self.user = user

    def account(self) -> User:
        """
        Loads the token holder's row. Tokens outlive deleted accounts, so
        handlers that write rows referencing the caller check it first.
        """
        account = self.db.get(User, self.user.id)
        if not account:
            raise_unauthorized()
        return account

class ListParams:
    """
    Raw page/limit/sort/order query parameters. Kept as strings so that
    malformed values fall back to defaults instead of failing validation.
    """
    def __init__(
        self,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None
    ):
        self.pagination: PageParams = parse_pagination(page, limit)
        self.sort = sort
        self.order = order
