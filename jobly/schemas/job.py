from pydantic import BaseModel, Field
from typing import List, Optional


class JobNew(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        extra = "forbid"


class JobUpdate(BaseModel):
    """
    Schema for a partial job update.

    id and companyHandle are fixed once a job exists.
    """
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    class Config:
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")


class JobOut(BaseModel):
    job: JobResponse


class JobListOut(BaseModel):
    jobs: List[JobResponse]
