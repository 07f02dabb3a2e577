"""
CRUD operations for companies.

Statements use positional placeholders and run through run_query. List
filters and partial updates are built by jobly.helpers.sql.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.errors import BadRequestError, ConflictError, NotFoundError
from jobly.helpers.sql import sql_for_company_filter, sql_for_partial_update
from jobly.schemas.company import CompanyNew

logger = logging.getLogger(__name__)

# Wire name -> column name for fields that differ
COMPANY_JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = """handle,
                  name,
                  description,
                  num_employees AS "numEmployees",
                  logo_url AS "logoUrl\""""


def _ensure_name_available(db: Session, name: str, handle: Optional[str] = None) -> None:
    """Raise ConflictError if a company other than `handle` already uses `name`."""
    rows = run_query(
        db,
        """SELECT handle
           FROM companies
           WHERE name = $1""",
        [name],
    )
    if any(row["handle"] != handle for row in rows):
        raise ConflictError(f"Duplicate company name: {name}")


def create(db: Session, company_data: CompanyNew) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        company_data: Validated company data

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        ConflictError: If a company with the same handle or name exists
    """
    duplicate_check = run_query(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [company_data.handle],
    )
    if duplicate_check:
        raise ConflictError(f"Duplicate company: {company_data.handle}")

    _ensure_name_available(db, company_data.name)

    rows = run_query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    )

    logger.info(f"Created company {company_data.handle}")
    return rows[0]


def find_all(db: Session, filter_data: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        db: Database session
        filter_data: Optional subset of {name, minEmployees, maxEmployees}

    Raises:
        BadRequestError: minEmployees greater than maxEmployees, or an unknown filter key
    """
    if filter_data is None:
        return run_query(
            db,
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                ORDER BY name""",
        )

    if isinstance(filter_data, Mapping):
        min_employees = filter_data.get("minEmployees")
        max_employees = filter_data.get("maxEmployees")
        if min_employees is not None and max_employees is not None and min_employees > max_employees:
            raise BadRequestError("The filter minEmployees cannot be greater than the filter maxEmployees")

    filter_cols, values = sql_for_company_filter(filter_data)
    where = f"WHERE {filter_cols}" if filter_cols else ""

    return run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            {where}
            ORDER BY name""",
        values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1""",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Only the fields present in data are changed. data may include
    {name, description, numEmployees, logoUrl}.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no company has this handle
        ConflictError: If data renames the company to a name another company uses
    """
    set_cols, values = sql_for_partial_update(data, COMPANY_JS_TO_SQL)
    if data.get("name") is not None:
        _ensure_name_available(db, data["name"], handle)

    handle_var_idx = f"${len(values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = {handle_var_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*values, handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        """DELETE
           FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
