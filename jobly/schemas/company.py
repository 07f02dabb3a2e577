"""
Pydantic schemas for companies.

Field aliases carry the camelCase names used on the wire; the CRUD layer
translates them to column names.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class CompanyNew(BaseModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyUpdate(BaseModel):
    """
    Schema for a partial company update.

    handle cannot be changed. name and description may be omitted but not set to null.
    """
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyResponse(BaseModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyJob(BaseModel):
    """A job as listed inside a company detail response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyOut(BaseModel):
    company: CompanyResponse


class CompanyDetailOut(BaseModel):
    company: CompanyDetailResponse


class CompanyListOut(BaseModel):
    companies: List[CompanyResponse]
