"""
CRUD operations for jobs.

Jobs are addressed by title; `id` is only a surrogate key.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.errors import BadRequestError, ConflictError, NotFoundError
from jobly.helpers.sql import sql_for_job_filter, sql_for_partial_update
from jobly.schemas.job import JobNew

logger = logging.getLogger(__name__)

JOB_COLUMNS = """id,
                  title,
                  salary,
                  equity,
                  company_handle AS "companyHandle\""""


def create(db: Session, job_data: JobNew) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        ConflictError: If a job with the same title exists
        BadRequestError: If the company does not exist
    """
    duplicate_check = run_query(
        db,
        """SELECT title
           FROM jobs
           WHERE title = $1""",
        [job_data.title],
    )
    if duplicate_check:
        raise ConflictError(f"Duplicate job: {job_data.title}")

    company_check = run_query(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [job_data.company_handle],
    )
    if not company_check:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    rows = run_query(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    )

    logger.info(f"Created job {job_data.title} for company {job_data.company_handle}")
    return rows[0]


def find_all(db: Session, filter_data: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        filter_data: Optional subset of {title, minSalary, hasEquity}

    A filter that reduces to no clause at all (e.g. only hasEquity=false)
    runs the same query as no filter.
    """
    if filter_data is None:
        return run_query(
            db,
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                ORDER BY title""",
        )

    filter_cols, values = sql_for_job_filter(filter_data)
    where = f"WHERE {filter_cols}" if filter_cols else ""

    return run_query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            {where}
            ORDER BY title""",
        values,
    )


def get(db: Session, title: str) -> Dict[str, Any]:
    """
    Retrieve a job by title.

    Raises:
        NotFoundError: If no job has this title
    """
    rows = run_query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE title = $1""",
        [title],
    )
    if not rows:
        raise NotFoundError(f"No job: {title}")

    return rows[0]


def update(db: Session, title: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job. data may include {title, salary, equity}.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no job has this title
        ConflictError: If data renames the job to a title already in use
    """
    set_cols, values = sql_for_partial_update(data, {})

    new_title = data.get("title", title)
    if new_title != title:
        get(db, title)
        duplicate_check = run_query(
            db,
            """SELECT title
               FROM jobs
               WHERE title = $1""",
            [new_title],
        )
        if duplicate_check:
            raise ConflictError(f"Duplicate job: {new_title}")

    title_var_idx = f"${len(values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE title = {title_var_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, title],
    )
    if not rows:
        raise NotFoundError(f"No job: {title}")

    logger.info(f"Updated job {title}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, title: str) -> Dict[str, str]:
    """
    Delete a job by title.

    Returns:
        {"deleted": title}

    Raises:
        NotFoundError: If no job has this title
    """
    rows = run_query(
        db,
        """DELETE
           FROM jobs
           WHERE title = $1
           RETURNING title""",
        [title],
    )
    if not rows:
        raise NotFoundError(f"No job: {title}")

    logger.info(f"Deleted job {title}")
    return {"deleted": title}
