from typing import Optional

from fastapi import Header, Query

from vibeshop.config import settings


def current_user_id(
    user_id: Optional[str] = Query(None, alias="userId"),
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> str:
    """
    Resolve the shopper for this request: ?userId=, then X-User-Id, then the
    configured default. Swap this dependency out to plug in real auth.
    """
    return user_id or x_user_id or settings.DEFAULT_USER_ID
