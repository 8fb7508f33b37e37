# app/models/companies.py

from typing import List, Optional

from pydantic import BaseModel


class CompanyIn(BaseModel):
    # Nothing is required here: create leaves it to the NOT NULL columns,
    # update checks name/description itself.
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class CompanySummary(BaseModel):
    code: str
    name: str


class CompanyOut(BaseModel):
    code: str
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class CompanyDetail(CompanyOut):
    invoices: List[int]


class CompanyListResponse(BaseModel):
    companies: List[CompanySummary]


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail
