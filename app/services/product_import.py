import logging
from dataclasses import dataclass, field
from typing import Any, List

from pydantic import ValidationError
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.core.errors import format_validation_errors
from app.models.products import Products
from app.schemas.products import ProductImportItem

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Per-record outcome of an import run, in input order."""
    inserted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def _insert_if_absent(dialect_name: str):
    if dialect_name == "postgresql":
        return postgresql.insert(Products)
    if dialect_name == "sqlite":
        return sqlite.insert(Products)
    raise ValueError(f"Import is not supported for the '{dialect_name}' database dialect")


def import_products(db: Session, records: List[Any]) -> ImportResult:
    """
    Insert each product whose name is not stored yet, one statement per record.

    Existing names are left untouched. Every record is validated and inserted
    on its own commit, so when a record is malformed or its insert fails the
    error propagates and the records before it stay in the database.
    """
    dialect_name = db.get_bind().dialect.name
    result = ImportResult()

    for idx, record in enumerate(records):
        try:
            product = ProductImportItem.model_validate(record)
        except ValidationError as e:
            logger.error(f"Import stopped at record {idx + 1}: invalid data")
            raise ValueError(format_validation_errors(e, prefix=f"products.{idx}")) from e

        stmt = (
            _insert_if_absent(dialect_name)
            .values(
                name=product.name,
                unit=product.unit,
                category=product.category,
                brand=product.brand,
                stock=product.stock,
                status=product.status,
                image=product.image,
            )
            .on_conflict_do_nothing(index_elements=["name"])
        )
        try:
            outcome = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"Import stopped at record {idx + 1} ({product.name!r})")
            raise

        if outcome.rowcount:
            result.inserted.append(product.name)
        else:
            logger.info(f"Skipping existing product: {product.name}")
            result.skipped.append(product.name)

    return result
