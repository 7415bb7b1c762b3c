"""Contract oracles for the product catalog scenarios.

Each `check_*` function takes the `ResponseDescriptor` returned by the
request helper and raises `ContractViolation` on the first mismatch. Both the
behave steps and the offline functional tests call these, so a scenario's
oracle is defined exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from catalog_contract.http.client import ResponseDescriptor
from catalog_contract.logic.ordering import adjacent_inversions
from catalog_contract.logic.schemas import schema_errors
from catalog_contract.models.product import CategoryEntry, ProductListPage, ProductRecord


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 30
PAGE_KEYS = frozenset({"products", "total", "skip", "limit"})
SORT_INVERSION_TOLERANCE = 2
CREATE_STATUSES = frozenset({200, 201})
UPDATE_STATUSES = frozenset({200, 201})
NOT_FOUND_STATUSES = frozenset({404, 200})
PREFERRED_CATEGORY = "smartphones"


class ContractViolation(AssertionError):
    """A response was received but breaks an asserted invariant."""

    def __init__(self, expectation: str, actual: Any, *, response: Optional[ResponseDescriptor] = None) -> None:
        where = f" ({response.method} {response.path})" if response is not None else ""
        super().__init__(f"Expected {expectation}{where}, got {actual!r}")
        self.expectation = expectation
        self.actual = actual
        self.response = response


# ------------------
# Shared assertions
# ------------------

def expect_status(resp: ResponseDescriptor, allowed: Collection[int]) -> int:
    allowed_set = {int(s) for s in allowed}
    if resp.status not in allowed_set:
        raise ContractViolation(f"status in {sorted(allowed_set)}", resp.status, response=resp)
    return resp.status


def expect_schema(resp: ResponseDescriptor, schema_name: str) -> None:
    errors = schema_errors(resp.body, schema_name)
    if errors:
        raise ContractViolation(f"body matching schema {schema_name}", "; ".join(errors[:5]), response=resp)


def expect_object(resp: ResponseDescriptor) -> Dict[str, Any]:
    if not isinstance(resp.body, dict):
        raise ContractViolation("a JSON object body", type(resp.body).__name__, response=resp)
    return resp.body


def expect_field(resp: ResponseDescriptor, record: Dict[str, Any], name: str) -> Any:
    if name not in record:
        raise ContractViolation(f"field {name!r} present", sorted(record), response=resp)
    return record[name]


def parse_page(resp: ResponseDescriptor) -> ProductListPage:
    expect_schema(resp, "ProductListPage")
    try:
        return ProductListPage.model_validate(resp.body)
    except PydanticValidationError as exc:
        raise ContractViolation("a product list page", str(exc), response=resp) from exc


def _raw_products(resp: ResponseDescriptor) -> List[Dict[str, Any]]:
    body = expect_object(resp)
    products = body.get("products")
    if not isinstance(products, list):
        raise ContractViolation("a products array", type(products).__name__, response=resp)
    return products


def _expect_non_empty(resp: ResponseDescriptor, items: List[Any], what: str) -> None:
    if not items:
        raise ContractViolation(f"at least one {what}", 0, response=resp)


# ------------------
# Listing and pagination
# ------------------

def check_default_listing(resp: ResponseDescriptor) -> ProductListPage:
    expect_status(resp, {200})
    body = expect_object(resp)
    keys = set(body)
    if keys != PAGE_KEYS:
        raise ContractViolation(f"top-level keys exactly {sorted(PAGE_KEYS)}", sorted(keys), response=resp)
    page = parse_page(resp)
    if len(page.products) != DEFAULT_PAGE_SIZE:
        raise ContractViolation(f"{DEFAULT_PAGE_SIZE} products by default", len(page.products), response=resp)
    return page


def check_paginated_selection(
    resp: ResponseDescriptor,
    *,
    limit: int,
    skip: int,
    selected: Iterable[str] = ("title", "price"),
    excluded: Iterable[str] = ("description",),
    allow_short_last_page: bool = False,
) -> ProductListPage:
    """Check an echoed window of exactly `limit` products with only the selected fields.

    With `allow_short_last_page` a window running past `total` may hold fewer
    products; by default a short or empty page is a violation.
    """
    expect_status(resp, {200})
    page = parse_page(resp)
    if page.limit != limit:
        raise ContractViolation(f"echoed limit {limit}", page.limit, response=resp)
    if page.skip != skip:
        raise ContractViolation(f"echoed skip {skip}", page.skip, response=resp)
    expected_count = limit
    if allow_short_last_page:
        expected_count = min(limit, max(page.total - skip, 0))
    if len(page.products) != expected_count:
        raise ContractViolation(f"{expected_count} products", len(page.products), response=resp)
    selected = list(selected)
    excluded = list(excluded)
    for raw in _raw_products(resp):
        for name in selected:
            expect_field(resp, raw, name)
        present = [name for name in excluded if name in raw]
        if present:
            raise ContractViolation(f"fields {excluded} absent under select", present, response=resp)
    return page


# ------------------
# Sorting
# ------------------

def check_sorted_titles(
    resp: ResponseDescriptor,
    *,
    descending: bool = False,
    tolerance: int = SORT_INVERSION_TOLERANCE,
) -> List[str]:
    expect_status(resp, {200})
    page = parse_page(resp)
    titles = []
    for product in page.products:
        if not isinstance(product.title, str):
            raise ContractViolation("every product to carry a string title", product.title, response=resp)
        titles.append(product.title)
    inversions = adjacent_inversions(titles, descending=descending)
    if inversions:
        logger.info("sort.inversions count=%d tolerance=%d pairs=%s", len(inversions), tolerance, inversions)
    if len(inversions) > tolerance:
        order = "descending" if descending else "ascending"
        raise ContractViolation(f"{order} titles with at most {tolerance} inversions", inversions, response=resp)
    return titles


# ------------------
# Lookup and search
# ------------------

def check_product_lookup(resp: ResponseDescriptor, product_id: int) -> ProductRecord:
    expect_status(resp, {200})
    body = expect_object(resp)
    if body.get("id") != product_id:
        raise ContractViolation(f"id {product_id}", body.get("id"), response=resp)
    expect_field(resp, body, "title")
    expect_field(resp, body, "price")
    return ProductRecord.model_validate(body)


def check_search(resp: ResponseDescriptor, term: str) -> List[ProductRecord]:
    expect_status(resp, {200})
    page = parse_page(resp)
    _expect_non_empty(resp, page.products, "search result")
    needle = term.casefold()
    if not any(needle in (p.title or "").casefold() for p in page.products):
        raise ContractViolation(
            f"a product title containing {term!r}",
            [p.title for p in page.products],
            response=resp,
        )
    return page.products


# ------------------
# Categories
# ------------------

def check_category_names(resp: ResponseDescriptor) -> List[str]:
    expect_status(resp, {200})
    expect_schema(resp, "CategoryNameList")
    return list(resp.body)


def check_category_details(resp: ResponseDescriptor) -> List[CategoryEntry]:
    expect_status(resp, {200})
    expect_schema(resp, "CategoryEntryList")
    return [CategoryEntry.model_validate(item) for item in resp.body]


def pick_category(names: List[str], preferred: str = PREFERRED_CATEGORY) -> str:
    if not names:
        raise ContractViolation("a non-empty category list", names)
    return preferred if preferred in names else names[0]


def check_category_products(resp: ResponseDescriptor, category: str) -> ProductListPage:
    expect_status(resp, {200})
    page = parse_page(resp)
    if page.total <= 0:
        raise ContractViolation(f"total > 0 for category {category!r}", page.total, response=resp)
    _expect_non_empty(resp, page.products, f"product in {category!r}")
    strays = [(p.id, p.category) for p in page.products if p.category != category]
    if strays:
        raise ContractViolation(f"every product in category {category!r}", strays, response=resp)
    return page


# ------------------
# Simulated mutations
# ------------------

def check_simulated_create(resp: ResponseDescriptor, title: str) -> Dict[str, Any]:
    expect_status(resp, CREATE_STATUSES)
    body = expect_object(resp)
    if body.get("title") != title:
        raise ContractViolation(f"title {title!r}", body.get("title"), response=resp)
    expect_field(resp, body, "id")
    return body


def check_simulated_update(resp: ResponseDescriptor, title: str) -> Dict[str, Any]:
    expect_status(resp, UPDATE_STATUSES)
    body = expect_object(resp)
    if body.get("title") != title:
        raise ContractViolation(f"title {title!r}", body.get("title"), response=resp)
    return body


def check_partial_update(resp: ResponseDescriptor, price: float) -> Dict[str, Any]:
    expect_status(resp, {200})
    body = expect_object(resp)
    if body.get("price") != price:
        raise ContractViolation(f"price {price!r}", body.get("price"), response=resp)
    return body


def check_simulated_delete(resp: ResponseDescriptor) -> Dict[str, Any]:
    expect_status(resp, {200})
    body = expect_object(resp)
    if body.get("isDeleted") is not True:
        raise ContractViolation("isDeleted true", body.get("isDeleted"), response=resp)
    expect_field(resp, body, "deletedOn")
    expect_schema(resp, "DeletedProduct")
    return body


# ------------------
# Negative paths
# ------------------

def check_not_found(resp: ResponseDescriptor, product_id: int) -> int:
    status = expect_status(resp, NOT_FOUND_STATUSES)
    if status == 404:
        expect_schema(resp, "NotFoundMessage")
    elif isinstance(resp.body, dict) and resp.body.get("id") == product_id:
        raise ContractViolation(f"no product with id {product_id}", resp.body.get("id"), response=resp)
    return status


__all__ = [
    "ContractViolation",
    "check_category_details",
    "check_category_names",
    "check_category_products",
    "check_default_listing",
    "check_not_found",
    "check_paginated_selection",
    "check_partial_update",
    "check_product_lookup",
    "check_search",
    "check_simulated_create",
    "check_simulated_delete",
    "check_simulated_update",
    "check_sorted_titles",
    "expect_schema",
    "expect_status",
    "pick_category",
]
