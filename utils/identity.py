from typing import Optional

from fastapi import Header, HTTPException


def require_user_id(x_user_id: Optional[str] = Header(None, max_length=64)) -> str:
    """Caller identity from the trusted `x-user-id` header set by the auth layer."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id
