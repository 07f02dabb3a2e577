import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import job as job_crud
from jobly.schemas.job import JobNew, JobUpdate, JobOut, JobListOut
from jobly.schemas.filters import JobFilterParams, parse_query_filter

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobOut, dependencies=[Depends(ensure_admin)])
def create_job(request: JobNew, db: Session = Depends(get_db)):
    """
    Create a job for an existing company. Admin only.
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("", response_model=JobListOut)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs.

    Optional query filters:
    - title: case-insensitive substring of the job title
    - minSalary: minimum salary
    - hasEquity: true to keep only jobs with non-zero equity; false means no restriction
    """
    filter_data = parse_query_filter(JobFilterParams, request.query_params)
    jobs = job_crud.find_all(db, filter_data)
    return {"jobs": jobs}


@router.get("/{title}", response_model=JobOut)
def get_job(title: str, db: Session = Depends(get_db)):
    """
    Retrieve a job by title.
    """
    job = job_crud.get(db, title)
    return {"job": job}


@router.patch("/{title}", response_model=JobOut, dependencies=[Depends(ensure_admin)])
def update_job(title: str, request: JobUpdate, db: Session = Depends(get_db)):
    """
    Partially update a job. Admin only.

    Fields can be: {title, salary, equity}
    """
    data = request.model_dump(exclude_unset=True)
    job = job_crud.update(db, title, data)
    return {"job": job}


@router.delete("/{title}")
def delete_job(title: str, db: Session = Depends(get_db), admin: dict = Depends(ensure_admin)):
    """
    Delete a job by title. Admin only.
    """
    result = job_crud.remove(db, title)
    logger.info(f"Job {title} deleted by {admin['username']}")
    return result
