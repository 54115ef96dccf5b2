# catalog/auth.py
from typing import Any, Dict, Optional

from fastapi import Header

from .errors import AuthenticationError

DEMO_USER = {"id": "user123", "name": "Demo User"}


async def authenticate(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    authorization: Optional[str] = Header(None),
) -> Dict[str, Any]:
    """Require a non-empty API key on mutating routes.

    Any non-blank value is accepted; the caller becomes the fixed demo user.
    """
    api_key = x_api_key or authorization
    if not api_key:
        raise AuthenticationError("Missing API key. Please provide X-API-Key header or Authorization header.")
    if not api_key.strip():
        raise AuthenticationError("Invalid API key provided.")
    return {**DEMO_USER, "apiKey": api_key}
