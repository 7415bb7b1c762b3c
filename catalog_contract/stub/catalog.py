"""Seed catalogue and query semantics for the offline mirror.

Mirrors the public catalog's listing rules: `limit` defaults to 30 and `0`
means "everything", `select` always keeps `id`, and mutations are simulated
(the returned record reflects the change but the seed never does).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

DEFAULT_LIMIT = 30

CATEGORY_NAMES: Dict[str, str] = {
    "beauty": "Beauty",
    "fragrances": "Fragrances",
    "furniture": "Furniture",
    "groceries": "Groceries",
    "laptops": "Laptops",
    "smartphones": "Smartphones",
}

_SEED_ROWS = (
    ("beauty", "Essence Mascara Lash Princess", 9.99, "Essence"),
    ("beauty", "Eyeshadow Palette with Mirror", 19.99, "Glamour Beauty"),
    ("beauty", "Powder Canister", 14.99, "Velvet Touch"),
    ("beauty", "Red Lipstick", 12.99, "Chic Cosmetics"),
    ("beauty", "Red Nail Polish", 8.99, "Nail Couture"),
    ("beauty", "Hydrating Face Serum", 24.99, "Dewdrop"),
    ("fragrances", "Calvin Klein CK One", 49.99, "Calvin Klein"),
    ("fragrances", "Chanel Coco Noir Eau De", 129.99, "Chanel"),
    ("fragrances", "Dior J'adore", 89.99, "Dior"),
    ("fragrances", "Dolce Shine Eau de", 69.99, "Dolce & Gabbana"),
    ("fragrances", "Gucci Bloom Eau de", 79.99, "Gucci"),
    ("fragrances", "Éclat Citrus Cologne", 39.99, "Maison Éclat"),
    ("furniture", "Annibale Colombo Bed", 1899.99, "Annibale Colombo"),
    ("furniture", "Annibale Colombo Sofa", 2499.99, "Annibale Colombo"),
    ("furniture", "Bedside Table African Cherry", 299.99, "Furniture Co."),
    ("furniture", "Knoll Saarinen Executive Conference Chair", 499.99, "Knoll"),
    ("furniture", "Wooden Bathroom Sink With Mirror", 799.99, "Bath Trends"),
    ("furniture", "Velvet Accent Chair", 349.99, "Furniture Co."),
    ("groceries", "Apple", 1.99, None),
    ("groceries", "Beef Steak", 12.99, None),
    ("groceries", "Cat Food", 8.99, None),
    ("groceries", "Chicken Meat", 9.99, None),
    ("groceries", "Cooking Oil", 4.99, None),
    ("groceries", "Cucumber", 1.49, None),
    ("laptops", "Apple MacBook Pro 14 Inch Space Grey", 1999.99, "Apple"),
    ("laptops", "Asus Zenbook Pro Dual Screen Laptop", 1799.99, "Asus"),
    ("laptops", "Huawei Matebook X Pro", 1399.99, "Huawei"),
    ("laptops", "Lenovo Yoga 920", 1099.99, "Lenovo"),
    ("laptops", "New DELL XPS 13 9300 Laptop", 1499.99, "Dell"),
    ("laptops", "Microsoft Surface Laptop 4", 1299.99, "Microsoft"),
    ("smartphones", "iPhone 5s", 199.99, "Apple"),
    ("smartphones", "iPhone 6", 299.99, "Apple"),
    ("smartphones", "iPhone 13 Pro", 1099.99, "Apple"),
    ("smartphones", "Samsung Galaxy S8", 499.99, "Samsung"),
    ("smartphones", "Oppo A57", 249.99, "Oppo"),
    ("smartphones", "Realme XT", 349.99, "Realme"),
)


def _build_seed() -> List[Dict[str, Any]]:
    products = []
    for idx, (category, title, price, brand) in enumerate(_SEED_ROWS, start=1):
        record: Dict[str, Any] = {
            "id": idx,
            "title": title,
            "description": f"{title} from the {CATEGORY_NAMES[category].lower()} range.",
            "category": category,
            "price": price,
            "rating": round(3.0 + (idx % 20) / 10, 2),
            "stock": (idx * 7) % 100,
        }
        if brand:
            record["brand"] = brand
        products.append(record)
    return products


PRODUCTS: List[Dict[str, Any]] = _build_seed()


class UnknownProduct(LookupError):
    def __init__(self, product_id: Any) -> None:
        super().__init__(f"Product with id '{product_id}' not found")
        self.product_id = product_id


def _sort_value(value: Any) -> Any:
    if isinstance(value, str):
        return (1, value.casefold())
    if value is None:
        return (2, "")
    return (0, value)


def _project(record: Dict[str, Any], fields: Optional[List[str]]) -> Dict[str, Any]:
    if not fields:
        return dict(record)
    out = {"id": record["id"]}
    for name in fields:
        if name in record:
            out[name] = record[name]
    return out


def paginate(
    items: List[Dict[str, Any]],
    *,
    limit: int = DEFAULT_LIMIT,
    skip: int = 0,
    select: Optional[str] = None,
    sort_by: Optional[str] = None,
    order: str = "asc",
) -> Dict[str, Any]:
    rows = list(items)
    if sort_by:
        rows.sort(key=lambda r: _sort_value(r.get(sort_by)), reverse=(order == "desc"))
    total = len(rows)
    window = rows[skip:] if limit == 0 else rows[skip : skip + limit]
    fields = [f.strip() for f in select.split(",") if f.strip()] if select else None
    return {
        "products": [_project(r, fields) for r in window],
        "total": total,
        "skip": skip,
        "limit": len(window) if limit == 0 else limit,
    }


def search(term: str) -> List[Dict[str, Any]]:
    needle = (term or "").casefold()
    return [
        p for p in PRODUCTS
        if needle in p["title"].casefold() or needle in p.get("description", "").casefold()
    ]


def in_category(slug: str) -> List[Dict[str, Any]]:
    return [p for p in PRODUCTS if p.get("category") == slug]


def get_product(product_id: int) -> Dict[str, Any]:
    for p in PRODUCTS:
        if p["id"] == product_id:
            return dict(p)
    raise UnknownProduct(product_id)


def simulate_add(draft: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": len(PRODUCTS) + 1, **draft}


def simulate_update(product_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
    current = get_product(product_id)
    current.update(changes)
    current["id"] = product_id
    return current


def simulate_delete(product_id: int) -> Dict[str, Any]:
    current = get_product(product_id)
    current["isDeleted"] = True
    current["deletedOn"] = datetime.now(timezone.utc).isoformat()
    return current


__all__ = [
    "CATEGORY_NAMES",
    "DEFAULT_LIMIT",
    "PRODUCTS",
    "UnknownProduct",
    "get_product",
    "in_category",
    "paginate",
    "search",
    "simulate_add",
    "simulate_delete",
    "simulate_update",
]
