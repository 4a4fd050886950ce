from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query
from ..db import get_conn
from ..models import Product
from pydantic import ValidationError
import logging
logger = logging.getLogger("storefront.products")

router = APIRouter(tags=["products"])

PRODUCT_COLUMNS = "id, name, description, price, lower(COALESCE(currency, 'usd')), image, sku"

def row_to_product(r) -> Product:
    return Product(
        id=str(r[0]),
        name=str(r[1]) if r[1] is not None else "",
        description=r[2] or None,
        price=int(r[3]) if r[3] is not None else 0,
        currency=str(r[4]),
        image=r[5] or None,
        sku=r[6] or None,
    )

@router.get("/products", summary="List products", response_model=List[Product])
async def list_products(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    q: Optional[str] = None,
):
    conn = get_conn()

    where, params = "", []
    if q:
        where = " WHERE (name ILIKE ? OR description ILIKE ?)"
        params += [f"%{q}%", f"%{q}%"]
    params += [int(limit), int(offset)]

    rows = conn.execute(
        f"SELECT {PRODUCT_COLUMNS} FROM products{where} ORDER BY name LIMIT ? OFFSET ?", params
    ).fetchall()

    items: List[Product] = []
    for r in rows:
        try:
            items.append(row_to_product(r))
        except ValidationError as e:
            logger.warning("Product validation skipped id=%s error=%s", r[0], e)
    return items


@router.get("/products/{product_id}", summary="Get product detail", response_model=Product)
async def get_product(product_id: str):
    conn = get_conn()
    row = conn.execute(f"SELECT {PRODUCT_COLUMNS} FROM products WHERE id = ? LIMIT 1", [product_id]).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Product not found")
    return row_to_product(row)
