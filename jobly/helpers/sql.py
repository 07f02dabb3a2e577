"""
SQL fragment builders for partial updates and list filters.

Each builder turns a sparse mapping into a fragment that uses PostgreSQL
positional placeholders ($1, $2, ...) plus the list of values those
placeholders bind to. Clauses and their values are collected together as
pairs and only numbered once the final clause list is known, so the Nth
placeholder always lines up with the Nth value.

Column names come from the rule tables in this module (or from the caller's
translation map for updates), never from request values.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from jobly.core.errors import BadRequestError


@dataclass(frozen=True)
class _Clause:
    """One comparison, with the value it binds if it binds one."""
    text: str
    binds: bool = False
    value: Any = None


def _number_clauses(clauses: Iterable[_Clause], joiner: str) -> Tuple[str, List[Any]]:
    """Assign $1..$n to the binding clauses in order and split out the values."""
    parts: List[str] = []
    values: List[Any] = []

    for clause in clauses:
        if clause.binds:
            values.append(clause.value)
            parts.append(f"{clause.text}${len(values)}")
        else:
            parts.append(clause.text)

    return joiner.join(parts), values


def sql_for_partial_update(
    data_to_update: Mapping,
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the SET portion of an UPDATE statement.

    Args:
        data_to_update: Field name -> new value, e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: Field name -> column name for fields whose column is named
            differently, e.g. {"firstName": "first_name"}. Other fields are used as-is.

    Returns:
        (set_cols, values) such as ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If there is nothing to update
    """
    if not isinstance(data_to_update, Mapping) or not data_to_update:
        raise BadRequestError("No data supplied for update")

    column_names = js_to_sql or {}
    clauses = [
        _Clause(f'"{column_names.get(field, field)}"=', binds=True, value=value)
        for field, value in data_to_update.items()
    ]

    return _number_clauses(clauses, ", ")


class MatchMode(str, enum.Enum):
    """How a filter value is bound to its placeholder."""
    EXACT = "exact"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class FilterRule:
    """A filter key that compares one column against the supplied value."""
    column: str
    operator: str
    match: MatchMode = MatchMode.EXACT

    def clause(self, value: Any) -> Optional[_Clause]:
        if self.match is MatchMode.SUBSTRING:
            value = f"%{value}%"
        return _Clause(f'"{self.column}" {self.operator} ', binds=True, value=value)


class EquityFilter(str, enum.Enum):
    """
    State of the hasEquity filter.

    - ABSENT: key not supplied, no clause
    - REQUIRED: hasEquity=true, constant clause "equity" > 0 with no value
    - NOT_REQUIRED: hasEquity=false, no clause and no value
    """
    ABSENT = "absent"
    REQUIRED = "required"
    NOT_REQUIRED = "not_required"

    @classmethod
    def from_value(cls, value: Any) -> "EquityFilter":
        if value is True:
            return cls.REQUIRED
        if value is False:
            return cls.NOT_REQUIRED
        raise BadRequestError("hasEquity must be true or false")


_EQUITY_CLAUSES: Dict[EquityFilter, Optional[_Clause]] = {
    EquityFilter.ABSENT: None,
    EquityFilter.REQUIRED: _Clause('"equity" > 0'),
    EquityFilter.NOT_REQUIRED: None,
}


class EquityRule:
    """The hasEquity key: a constant predicate or nothing at all."""

    def clause(self, value: Any) -> Optional[_Clause]:
        return _EQUITY_CLAUSES[EquityFilter.from_value(value)]


COMPANY_FILTERS = {
    "name": FilterRule("name", "ILIKE", MatchMode.SUBSTRING),
    "minEmployees": FilterRule("num_employees", ">="),
    "maxEmployees": FilterRule("num_employees", "<="),
}

JOB_FILTERS = {
    "title": FilterRule("title", "ILIKE", MatchMode.SUBSTRING),
    "minSalary": FilterRule("salary", ">="),
    "hasEquity": EquityRule(),
}


def _sql_for_filter(filter_data: Mapping, rules: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    if not isinstance(filter_data, Mapping):
        raise BadRequestError("Filter data must be an object")

    clauses: List[_Clause] = []
    for key, value in filter_data.items():
        rule = rules.get(key)
        if rule is None:
            raise BadRequestError(f"{key} is not an appropriate filter option")
        clause = rule.clause(value)
        if clause is not None:
            clauses.append(clause)

    return _number_clauses(clauses, " AND ")


def sql_for_company_filter(filter_data: Mapping) -> Tuple[str, List[Any]]:
    """
    Build the WHERE condition for listing companies.

    Accepts any subset of {name, minEmployees, maxEmployees}. Clauses follow
    the key order of filter_data.

        >>> sql_for_company_filter({"name": "dav", "maxEmployees": 10})
        ('"name" ILIKE $1 AND "num_employees" <= $2', ['%dav%', 10])

    The minEmployees <= maxEmployees check is left to the caller.

    Raises:
        BadRequestError: On a key outside the supported set
    """
    return _sql_for_filter(filter_data, COMPANY_FILTERS)


def sql_for_job_filter(filter_data: Mapping) -> Tuple[str, List[Any]]:
    """
    Build the WHERE condition for listing jobs.

    Accepts any subset of {title, minSalary, hasEquity}. hasEquity=true adds
    '"equity" > 0' without a placeholder; hasEquity=false adds nothing.
    The returned condition is empty when no clause survives, in which case
    the caller must not emit a WHERE keyword.

    Raises:
        BadRequestError: On a key outside the supported set
    """
    return _sql_for_filter(filter_data, JOB_FILTERS)
