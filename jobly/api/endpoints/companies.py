import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyNew,
    CompanyUpdate,
    CompanyOut,
    CompanyDetailOut,
    CompanyListOut,
)
from jobly.schemas.filters import CompanyFilterParams, parse_query_filter

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyOut, dependencies=[Depends(ensure_admin)])
def create_company(request: CompanyNew, db: Session = Depends(get_db)):
    """
    Create a company. Admin only.
    """
    company = company_crud.create(db, request)
    return {"company": company}


@router.get("", response_model=CompanyListOut)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies.

    Optional query filters:
    - name: case-insensitive substring of the company name
    - minEmployees / maxEmployees: employee count bounds (min may not exceed max)
    """
    filter_data = parse_query_filter(CompanyFilterParams, request.query_params)
    companies = company_crud.find_all(db, filter_data)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailOut)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.
    """
    company = company_crud.get(db, handle)
    return {"company": company}


@router.patch("/{handle}", response_model=CompanyOut, dependencies=[Depends(ensure_admin)])
def update_company(handle: str, request: CompanyUpdate, db: Session = Depends(get_db)):
    """
    Partially update a company. Admin only.

    Fields can be: {name, description, numEmployees, logoUrl}
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    return {"company": company}


@router.delete("/{handle}")
def delete_company(handle: str, db: Session = Depends(get_db), admin: dict = Depends(ensure_admin)):
    """
    Delete a company and its jobs. Admin only.
    """
    company_crud.remove(db, handle)
    logger.info(f"Company {handle} deleted by {admin['username']}")
    return {"deleted": handle}
