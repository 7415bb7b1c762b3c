"""Pydantic views of the catalog's response payloads.

The catalog owns these shapes; the harness only reads the fields it asserts
on, so every model allows extra fields and keeps optional ones optional.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None


class ProductListPage(BaseModel):
    model_config = ConfigDict(extra="allow")

    products: List[ProductRecord]
    total: int = Field(ge=0)
    skip: int = Field(ge=0)
    limit: int = Field(ge=0)


class CategoryEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    slug: str
    name: str
    url: str


class DeletedProduct(ProductRecord):
    isDeleted: bool
    deletedOn: str


class NotFoundMessage(BaseModel):
    message: str


class ProductDraft(BaseModel):
    """Request body accepted by the simulated create/update endpoints."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None


__all__ = [
    "CategoryEntry",
    "DeletedProduct",
    "NotFoundMessage",
    "ProductDraft",
    "ProductListPage",
    "ProductRecord",
]
