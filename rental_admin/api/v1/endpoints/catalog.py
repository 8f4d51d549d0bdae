from typing import List, Optional
from fastapi import APIRouter, Depends
from rental_admin.api.v1.deps import backend_http_error
from rental_admin.clients.backend import BackendClient, BackendError
from rental_admin.clients.session import get_backend_client
from rental_admin.models.booking import BookingAccessory, CatalogItem, Category, Customer

router = APIRouter()

@router.get("/items", response_model=List[CatalogItem])
def list_items(
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    client: BackendClient = Depends(get_backend_client)
):
    """Inventory items a booking can be made for"""
    try:
        docs = client.list_items(category_id=category_id, search=search or None)
    except BackendError as exc:
        raise backend_http_error(exc)
    return [CatalogItem(**doc) for doc in docs]

@router.get("/accessories", response_model=List[BookingAccessory])
def list_accessories(client: BackendClient = Depends(get_backend_client)):
    try:
        docs = client.list_accessories()
    except BackendError as exc:
        raise backend_http_error(exc)
    return [BookingAccessory(**doc) for doc in docs]

@router.get("/categories", response_model=List[Category])
def list_categories(client: BackendClient = Depends(get_backend_client)):
    try:
        docs = client.list_categories()
    except BackendError as exc:
        raise backend_http_error(exc)
    return [Category(**doc) for doc in docs]

@router.get("/customers", response_model=List[Customer])
def list_customers(
    search: Optional[str] = None,
    client: BackendClient = Depends(get_backend_client)
):
    """Customers to pick from when filling the booking form"""
    try:
        docs = client.list_customers(search=search or None)
    except BackendError as exc:
        raise backend_http_error(exc)
    return [Customer(**doc) for doc in docs]
