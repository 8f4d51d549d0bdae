from typing import Iterator, Optional
from fastapi import Depends
from rental_admin.clients.backend import BackendClient
from rental_admin.core.auth import get_bearer_token


def get_backend_client(token: Optional[str] = Depends(get_bearer_token)) -> Iterator[BackendClient]:
    """Backend client scoped to one request, carrying the caller's token."""
    client = BackendClient(token=token)
    try:
        yield client
    finally:
        client.close()
