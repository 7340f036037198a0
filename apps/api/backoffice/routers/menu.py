"""
Menu router: list, create, replace, patch, delete and stock updates.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from backoffice.core.deps import get_menu_service
from backoffice.schemas.common import Envelope
from backoffice.schemas.menu import (
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    StockUpdate,
)
from backoffice.services.menu import MenuService

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=Envelope[List[MenuItemResponse]])
def list_menu_items(
    order_by: str = Query("id", description="'id' or 'category' (category, then name)"),
    category: Optional[str] = Query(None, description="Only items in this category"),
    available_only: bool = Query(False, description="Only items with stock"),
    service: MenuService = Depends(get_menu_service),
):
    """List all menu items. ``available`` is derived from stock."""
    items = service.list_items(order_by=order_by, category=category, available_only=available_only)
    return Envelope(data=[MenuItemResponse.model_validate(item) for item in items])


@router.get("/{item_id}", response_model=Envelope[MenuItemResponse])
def get_menu_item(item_id: int, service: MenuService = Depends(get_menu_service)):
    return Envelope(data=MenuItemResponse.model_validate(service.get(item_id)))


@router.post("", response_model=Envelope[MenuItemResponse], status_code=status.HTTP_201_CREATED)
def create_menu_item(data: MenuItemCreate, service: MenuService = Depends(get_menu_service)):
    return Envelope(data=MenuItemResponse.model_validate(service.create(data)))


@router.put("/{item_id}", response_model=Envelope[MenuItemResponse])
def replace_menu_item(
    item_id: int,
    data: MenuItemCreate,
    service: MenuService = Depends(get_menu_service),
):
    """Replace every editable field of a menu item."""
    return Envelope(data=MenuItemResponse.model_validate(service.replace(item_id, data)))


@router.patch("/{item_id}", response_model=Envelope[MenuItemResponse])
def update_menu_item(
    item_id: int,
    data: MenuItemUpdate,
    service: MenuService = Depends(get_menu_service),
):
    """Update only the fields present in the request body."""
    return Envelope(data=MenuItemResponse.model_validate(service.update(item_id, data)))


@router.patch("/{item_id}/stock", response_model=Envelope[MenuItemResponse])
def update_menu_item_stock(
    item_id: int,
    data: StockUpdate,
    service: MenuService = Depends(get_menu_service),
):
    return Envelope(data=MenuItemResponse.model_validate(service.set_stock(item_id, data.stock)))


@router.delete("/{item_id}", response_model=Envelope[None])
def delete_menu_item(item_id: int, service: MenuService = Depends(get_menu_service)):
    service.delete(item_id)
    return Envelope()
