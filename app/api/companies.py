# app/api/companies.py

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.engine import Engine

from app.db.engine import get_engine
from app.db.schema import companies, invoices
from app.exceptions import NotFoundError, require_fields
from app.models.common import DeletedResponse
from app.models.companies import (
    CompanyDetail,
    CompanyDetailResponse,
    CompanyIn,
    CompanyListResponse,
    CompanyOut,
    CompanyResponse,
    CompanySummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


def _row_to_company(row) -> CompanyOut:
    return CompanyOut(
        code=row["code"],
        name=row["name"],
        description=row["description"],
    )


@router.get("", response_model=CompanyListResponse)
def list_companies(engine: Engine = Depends(get_engine)) -> CompanyListResponse:
    """
    Return every company's code and name, ordered by name.
    """
    with engine.connect() as conn:
        stmt = select(companies.c.code, companies.c.name).order_by(companies.c.name.asc())
        rows = conn.execute(stmt).mappings().all()

    return CompanyListResponse(
        companies=[CompanySummary(code=row["code"], name=row["name"]) for row in rows]
    )


@router.get("/{code}", response_model=CompanyDetailResponse)
def get_company(code: str, engine: Engine = Depends(get_engine)) -> CompanyDetailResponse:
    """
    Return one company along with the ids of its invoices.
    """
    with engine.connect() as conn:
        stmt = (
            select(companies.c.code, companies.c.name, companies.c.description)
            .where(companies.c.code == code)
        )
        row = conn.execute(stmt).mappings().first()

        if row is None:
            raise NotFoundError("Company", code)

        # Only issued once the company is known to exist
        invoice_ids = conn.execute(
            select(invoices.c.id).where(invoices.c.comp_code == code)
        ).scalars().all()

    company = _row_to_company(row)
    return CompanyDetailResponse(
        company=CompanyDetail(**company.model_dump(), invoices=list(invoice_ids))
    )


@router.post("", response_model=CompanyResponse, status_code=201)
def create_company(payload: CompanyIn, engine: Engine = Depends(get_engine)) -> CompanyResponse:
    """
    Insert a company. Missing columns are left for the database to reject.
    """
    with engine.begin() as conn:
        stmt = (
            companies.insert()
            .values(code=payload.code, name=payload.name, description=payload.description)
            .returning(companies.c.code, companies.c.name, companies.c.description)
        )
        row = conn.execute(stmt).mappings().one()

    logger.info("Created company %s", row["code"])
    return CompanyResponse(company=_row_to_company(row))


@router.put("/{code}", response_model=CompanyResponse)
def update_company(
    code: str,
    payload: CompanyIn,
    engine: Engine = Depends(get_engine),
) -> CompanyResponse:
    """
    Replace a company's name and description. The code never changes.
    """
    require_fields(
        payload.model_dump(),
        "name",
        "description",
        message="Name and description required",
    )

    with engine.begin() as conn:
        stmt = (
            companies.update()
            .where(companies.c.code == code)
            .values(name=payload.name, description=payload.description)
            .returning(companies.c.code, companies.c.name, companies.c.description)
        )
        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise NotFoundError("Company", code)

    logger.info("Updated company %s", code)
    return CompanyResponse(company=_row_to_company(row))


@router.delete("/{code}", response_model=DeletedResponse)
def delete_company(code: str, engine: Engine = Depends(get_engine)) -> DeletedResponse:
    with engine.begin() as conn:
        stmt = companies.delete().where(companies.c.code == code).returning(companies.c.code)
        row = conn.execute(stmt).first()

    if row is None:
        raise NotFoundError("Company", code)

    logger.info("Deleted company %s", code)
    return DeletedResponse()
