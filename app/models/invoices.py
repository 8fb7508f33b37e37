# app/models/invoices.py

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from app.models.common import Amount


class InvoiceIn(BaseModel):
    comp_code: Optional[str] = None
    amt: Optional[float] = None


class InvoiceSummary(BaseModel):
    id: int
    comp_code: str


class InvoiceOut(BaseModel):
    id: int
    comp_code: str
    amt: Amount
    paid: bool
    add_date: date
    paid_date: Optional[date] = None

    class Config:
        from_attributes = True


class InvoiceCompany(BaseModel):
    # All null when the invoice's company row is missing (left join)
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class InvoiceDetail(BaseModel):
    id: int
    amt: Amount
    paid: bool
    add_date: date
    paid_date: Optional[date] = None
    company: InvoiceCompany


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceSummary]


class InvoiceResponse(BaseModel):
    invoice: InvoiceOut


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceDetail
