"""Product catalog endpoints served by the offline mirror."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from catalog_contract.models.product import ProductDraft
from catalog_contract.stub import catalog


router = APIRouter()
logger = logging.getLogger(__name__)


def _message(status: int, text: str) -> JSONResponse:
    return JSONResponse({"message": text}, status_code=status)


def _parse_id(raw: str) -> Optional[int]:
    token = (raw or "").strip()
    return int(token) if token.isdigit() else None


def _page_or_error(items, limit: int, skip: int, select: Optional[str], sort_by: Optional[str], order: str):
    if order not in {"asc", "desc"}:
        return _message(400, "Order can be: 'asc' or 'desc'")
    return catalog.paginate(items, limit=limit, skip=skip, select=select, sort_by=sort_by, order=order)


@router.get("/products", summary="List products", operation_id="listProducts", tags=["Products"])
def list_products(
    limit: int = Query(catalog.DEFAULT_LIMIT, ge=0),
    skip: int = Query(0, ge=0),
    select: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: str = "asc",
):
    return _page_or_error(catalog.PRODUCTS, limit, skip, select, sortBy, order)


@router.get("/products/search", summary="Search products", operation_id="searchProducts", tags=["Products"])
def search_products(
    q: str = "",
    limit: int = Query(catalog.DEFAULT_LIMIT, ge=0),
    skip: int = Query(0, ge=0),
    select: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: str = "asc",
):
    logger.info("mirror.search q=%r", q)
    return _page_or_error(catalog.search(q), limit, skip, select, sortBy, order)


@router.get("/products/categories", summary="List categories with details", tags=["Categories"])
def list_categories(request: Request):
    base = str(request.base_url).rstrip("/")
    return [
        {"slug": slug, "name": name, "url": f"{base}/products/category/{slug}"}
        for slug, name in catalog.CATEGORY_NAMES.items()
    ]


@router.get("/products/category-list", summary="List category slugs", tags=["Categories"])
def list_category_slugs():
    return list(catalog.CATEGORY_NAMES)


@router.get("/products/category/{slug}", summary="List products in a category", tags=["Categories"])
def list_category_products(
    slug: str,
    limit: int = Query(catalog.DEFAULT_LIMIT, ge=0),
    skip: int = Query(0, ge=0),
    select: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: str = "asc",
):
    return _page_or_error(catalog.in_category(slug), limit, skip, select, sortBy, order)


@router.post("/products/add", summary="Simulate product creation", tags=["Mutations"])
def add_product(draft: ProductDraft):
    created = catalog.simulate_add(draft.model_dump(exclude_unset=True))
    logger.info("mirror.add id=%s", created["id"])
    return JSONResponse(created, status_code=201)


@router.get("/products/{id}", summary="Get a single product", operation_id="getProduct", tags=["Products"])
def get_product(id: str):
    product_id = _parse_id(id)
    if product_id is None:
        return _message(400, f"Invalid product id '{id}'")
    try:
        return catalog.get_product(product_id)
    except catalog.UnknownProduct as exc:
        return _message(404, str(exc))


@router.put("/products/{id}", summary="Simulate full product update", tags=["Mutations"])
@router.patch("/products/{id}", summary="Simulate partial product update", tags=["Mutations"])
def update_product(id: str, draft: ProductDraft):
    product_id = _parse_id(id)
    if product_id is None:
        return _message(400, f"Invalid product id '{id}'")
    try:
        return catalog.simulate_update(product_id, draft.model_dump(exclude_unset=True))
    except catalog.UnknownProduct as exc:
        return _message(404, str(exc))


@router.delete("/products/{id}", summary="Simulate product deletion", tags=["Mutations"])
def delete_product(id: str):
    product_id = _parse_id(id)
    if product_id is None:
        return _message(400, f"Invalid product id '{id}'")
    try:
        return catalog.simulate_delete(product_id)
    except catalog.UnknownProduct as exc:
        return _message(404, str(exc))
