from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Tokens are issued and verified by the booking backend; they are only forwarded here.
security = HTTPBearer(auto_error=False)

def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Return the caller's bearer token, if any."""
    if credentials is None:
        return None
    return credentials.credentials
