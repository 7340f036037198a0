"""
Menu item Pydantic schemas for API request/response models.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _flag(english: str, spanish: str):
    # Older clients send the Spanish column names
    return Field(False, validation_alias=AliasChoices(english, spanish))


class MenuItemBase(BaseModel):
    """Fields an operator can set on a menu item."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, validation_alias=AliasChoices("description", "ingredientes"))
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    vegetarian: bool = _flag("vegetarian", "vegetariano")
    gluten: bool = _flag("gluten", "gluten")
    seafood: bool = _flag("seafood", "marisco")
    dairy: bool = _flag("dairy", "lactosa")
    vegan: bool = _flag("vegan", "vegano")


class MenuItemCreate(MenuItemBase):
    """Request model for creating or fully replacing a menu item."""
    pass


class MenuItemUpdate(BaseModel):
    """Request model for a partial menu item update."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, validation_alias=AliasChoices("description", "ingredientes"))
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    vegetarian: Optional[bool] = Field(None, validation_alias=AliasChoices("vegetarian", "vegetariano"))
    gluten: Optional[bool] = None
    seafood: Optional[bool] = Field(None, validation_alias=AliasChoices("seafood", "marisco"))
    dairy: Optional[bool] = Field(None, validation_alias=AliasChoices("dairy", "lactosa"))
    vegan: Optional[bool] = Field(None, validation_alias=AliasChoices("vegan", "vegano"))


class StockUpdate(BaseModel):
    stock: int = Field(..., ge=0)


class MenuItemResponse(BaseModel):
    """Response model for a single menu item."""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: Optional[str] = None
    stock: int
    available: bool
    vegetarian: bool = False
    gluten: bool = False
    seafood: bool = False
    dairy: bool = False
    vegan: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


MenuItemList = List[MenuItemResponse]
