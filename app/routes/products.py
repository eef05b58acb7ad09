import datetime
import logging
from typing import List
from fastapi import APIRouter, Depends, status, HTTPException
from sqlalchemy.orm import Session

from app.core.errors import parse_exception_to_error_message
from app.database import get_db
from app.models.products import Products
from app.models.inventory_history import InventoryHistory
from app.schemas.products import (
    ProductCreate,
    ProductCreatedResponse,
    ProductExportResponse,
    ProductImportRequest,
    ProductImportResponse,
    ProductResponse,
    ProductsDeletedResponse,
    ProductUpdate,
    ProductUpdatedResponse,
)
from app.schemas.inventory_history import InventoryHistoryListResponse
from app.services.product_import import import_products as run_import


# Mounted at /api/products
router = APIRouter()
# Mounted at /api/product
item_router = APIRouter()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def operation_failed(db: Session, e: Exception, context: str) -> HTTPException:
    """Roll back the session and build the 500 response for a failed operation."""
    db.rollback()
    message = parse_exception_to_error_message(e)
    logger.error(f"Error {context}: {message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message
    )


@router.get("", response_model=List[ProductResponse])
def get_all_products(db: Session = Depends(get_db)):
    """Return every product in storage order."""
    try:
        products = db.query(Products).all()
        logger.info(f"Retrieved {len(products)} products")
        return products
    except Exception as e:
        raise operation_failed(db, e, "fetching products")


@router.post("/import", response_model=ProductImportResponse)
def import_products(payload: ProductImportRequest, db: Session = Depends(get_db)):
    """
    Bulk insert products that do not exist yet, matched by name.

    Records are written one at a time. If one fails the request fails, and the
    records before it are kept.
    """
    logger.info(f"Importing {len(payload.products)} product(s)")
    try:
        result = run_import(db, payload.products)
    except Exception as e:
        raise operation_failed(db, e, "importing products")

    logger.info(f"Import finished: {len(result.inserted)} inserted, {len(result.skipped)} skipped")
    return {
        "message": "Products imported successfully",
        "inserted": len(result.inserted),
        "skipped": len(result.skipped)
    }


@router.get("/export", response_model=ProductExportResponse)
def export_products(db: Session = Depends(get_db)):
    """All products wrapped in an envelope that /import accepts back."""
    try:
        products = db.query(Products).all()
        logger.info(f"Exporting {len(products)} products")
        return {"products": products}
    except Exception as e:
        raise operation_failed(db, e, "exporting products")


@router.get("/{product_id}/history", response_model=InventoryHistoryListResponse)
def get_product_history(product_id: int, db: Session = Depends(get_db)):
    try:
        history = db.query(InventoryHistory).filter(
            InventoryHistory.product_id == product_id
        ).all()
        return {"history": history}
    except Exception as e:
        raise operation_failed(db, e, f"fetching history for product {product_id}")


@router.delete("/all", response_model=ProductsDeletedResponse)
def delete_all_products(db: Session = Depends(get_db)):
    """Remove every product together with its inventory history."""
    try:
        history_removed = db.query(InventoryHistory).delete(synchronize_session=False)
        changes = db.query(Products).delete(synchronize_session=False)
        db.commit()
    except Exception as e:
        raise operation_failed(db, e, "deleting all products")

    logger.info(f"Deleted {changes} products and {history_removed} history entries")
    return {"message": "All products deleted", "changes": changes}


def stock_for_update(db: Session, product_id: int):
    """Current stock of a product, row locked until the transaction ends."""
    return db.query(Products.stock).filter(Products.id == product_id).with_for_update()


@item_router.put("/{product_id}", response_model=ProductUpdatedResponse)
def update_product(product_id: int, product_data: ProductUpdate, db: Session = Depends(get_db)):
    """
    Replace the editable fields of a product.

    A missing id is not an error, the response just reports zero changes.
    When the stock value changes a history entry is recorded in the same
    transaction.
    """
    try:
        old_stock = stock_for_update(db, product_id).scalar()

        changes = db.query(Products).filter(Products.id == product_id).update(
            {
                Products.name: product_data.name,
                Products.unit: product_data.unit,
                Products.category: product_data.category,
                Products.brand: product_data.brand,
                Products.stock: product_data.stock,
                Products.status: product_data.status,
            },
            synchronize_session=False
        )

        if changes and old_stock != product_data.stock:
            db.add(InventoryHistory(
                product_id=product_id,
                old_quantity=old_stock,
                new_quantity=product_data.stock,
                change_date=datetime.datetime.now(datetime.timezone.utc).isoformat(),
                user_info=product_data.user_info
            ))

        db.commit()
    except Exception as e:
        raise operation_failed(db, e, f"updating product {product_id}")

    if not changes:
        logger.warning(f"Product with ID {product_id} not found, nothing updated")
    else:
        logger.info(f"Updated product {product_id}")
    return {"message": "Product updated successfully", "updatedId": product_id, "changes": changes}


@item_router.post("/new", response_model=ProductCreatedResponse)
def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    """Insert a single product. A name that already exists is an error."""
    try:
        db_product = Products(
            name=product.name,
            unit=product.unit,
            category=product.category,
            brand=product.brand,
            stock=product.stock,
            status=product.status,
            image=product.image
        )
        db.add(db_product)
        db.commit()
        db.refresh(db_product)
    except Exception as e:
        raise operation_failed(db, e, "adding product")

    logger.info(f"Added product {db_product.name} (ID: {db_product.id})")
    return {"message": "Product added successfully", "productId": db_product.id}
