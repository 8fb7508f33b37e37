# app/api/invoices.py

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.engine import Engine

from app.db.engine import get_engine
from app.db.schema import companies, invoices
from app.exceptions import NotFoundError, require_fields
from app.models.common import DeletedResponse
from app.models.invoices import (
    InvoiceCompany,
    InvoiceDetail,
    InvoiceDetailResponse,
    InvoiceIn,
    InvoiceListResponse,
    InvoiceOut,
    InvoiceResponse,
    InvoiceSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])

# ids are 64-bit integers in storage; anything wider is rejected as a bad request
InvoiceId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]

INVOICE_COLUMNS = (
    invoices.c.id,
    invoices.c.comp_code,
    invoices.c.amt,
    invoices.c.paid,
    invoices.c.add_date,
    invoices.c.paid_date,
)


def _row_to_invoice(row) -> InvoiceOut:
    return InvoiceOut(
        id=row["id"],
        comp_code=row["comp_code"],
        amt=row["amt"],
        paid=row["paid"],
        add_date=row["add_date"],
        paid_date=row["paid_date"],
    )


def _row_to_invoice_detail(row) -> InvoiceDetail:
    """
    Fold the flat joined row into an invoice with its company nested under
    "company". The company_* columns are all None for an orphaned invoice.
    """
    return InvoiceDetail(
        id=row["id"],
        amt=row["amt"],
        paid=row["paid"],
        add_date=row["add_date"],
        paid_date=row["paid_date"],
        company=InvoiceCompany(
            code=row["company_code"],
            name=row["company_name"],
            description=row["company_description"],
        ),
    )


@router.get("", response_model=InvoiceListResponse)
def list_invoices(engine: Engine = Depends(get_engine)) -> InvoiceListResponse:
    """
    Return every invoice's id and company code, ordered by company code.
    """
    with engine.connect() as conn:
        stmt = select(invoices.c.id, invoices.c.comp_code).order_by(invoices.c.comp_code.asc())
        rows = conn.execute(stmt).mappings().all()

    return InvoiceListResponse(
        invoices=[InvoiceSummary(id=row["id"], comp_code=row["comp_code"]) for row in rows]
    )


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
def get_invoice(invoice_id: InvoiceId, engine: Engine = Depends(get_engine)) -> InvoiceDetailResponse:
    """
    Look up a single invoice together with its company's details.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.id,
                invoices.c.amt,
                invoices.c.paid,
                invoices.c.add_date,
                invoices.c.paid_date,
                companies.c.code.label("company_code"),
                companies.c.name.label("company_name"),
                companies.c.description.label("company_description"),
            )
            # Left join: an invoice without a company still comes back
            .select_from(
                invoices.outerjoin(companies, invoices.c.comp_code == companies.c.code)
            )
            .where(invoices.c.id == invoice_id)
        )

        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise NotFoundError("Invoice", invoice_id)

    return InvoiceDetailResponse(invoice=_row_to_invoice_detail(row))


@router.post("", response_model=InvoiceResponse, status_code=201)
def create_invoice(payload: InvoiceIn, engine: Engine = Depends(get_engine)) -> InvoiceResponse:
    """
    Add an invoice. paid, add_date and paid_date come from the column defaults.
    """
    # amt=0 is rejected along with a missing amt
    require_fields(
        payload.model_dump(),
        "comp_code",
        "amt",
        message="comp_code and amt are required",
    )

    with engine.begin() as conn:
        stmt = (
            invoices.insert()
            .values(comp_code=payload.comp_code, amt=payload.amt)
            .returning(*INVOICE_COLUMNS)
        )
        row = conn.execute(stmt).mappings().one()

    logger.info("Created invoice %s for company %s", row["id"], row["comp_code"])
    return InvoiceResponse(invoice=_row_to_invoice(row))


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: InvoiceId,
    payload: InvoiceIn,
    engine: Engine = Depends(get_engine),
) -> InvoiceResponse:
    """
    Change an invoice's amount. Nothing else on the invoice is writable.
    """
    require_fields(payload.model_dump(), "amt", message="Amount is required")

    with engine.begin() as conn:
        stmt = (
            invoices.update()
            .where(invoices.c.id == invoice_id)
            .values(amt=payload.amt)
            .returning(*INVOICE_COLUMNS)
        )
        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise NotFoundError("Invoice", invoice_id)

    logger.info("Updated invoice %s", invoice_id)
    return InvoiceResponse(invoice=_row_to_invoice(row))


@router.delete("/{invoice_id}", response_model=DeletedResponse)
def delete_invoice(invoice_id: InvoiceId, engine: Engine = Depends(get_engine)) -> DeletedResponse:
    with engine.begin() as conn:
        stmt = invoices.delete().where(invoices.c.id == invoice_id).returning(invoices.c.id)
        row = conn.execute(stmt).first()

    if row is None:
        raise NotFoundError("Invoice", invoice_id)

    logger.info("Deleted invoice %s", invoice_id)
    return DeletedResponse()
