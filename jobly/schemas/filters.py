"""
Query-string schemas for list endpoints.

Each model is the closed set of filter keys one list endpoint accepts.
parse_query_filter validates a raw query string against one of them and
returns the filter mapping in the order the keys were given.
"""

from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from jobly.core.errors import BadRequestError


class CompanyFilterParams(BaseModel):
    name: str = Field(None, min_length=1)
    min_employees: int = Field(None, ge=0, alias="minEmployees")
    max_employees: int = Field(None, ge=0, alias="maxEmployees")

    class Config:
        extra = "forbid"


class JobFilterParams(BaseModel):
    title: str = Field(None, min_length=1)
    min_salary: int = Field(None, ge=0, alias="minSalary")
    has_equity: bool = Field(None, alias="hasEquity")

    class Config:
        extra = "forbid"


def parse_query_filter(model: Type[BaseModel], query_params: Mapping[str, str]) -> Optional[Dict[str, Any]]:
    """
    Validate query parameters into a filter mapping.

    Args:
        model: CompanyFilterParams or JobFilterParams
        query_params: Raw query parameters, e.g. request.query_params

    Returns:
        {alias: typed value} in query order, or None when no filter was given

    Raises:
        BadRequestError: Unknown key or value of the wrong type
    """
    raw = dict(query_params)
    if not raw:
        return None

    known = {field.alias or name for name, field in model.model_fields.items()}
    for key in raw:
        if key not in known:
            raise BadRequestError(f"{key} is not an appropriate filter option")

    try:
        validated = model.model_validate(raw)
    except ValidationError as e:
        messages = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise BadRequestError("; ".join(messages))

    values = validated.model_dump(by_alias=True, exclude_unset=True)
    return {key: values[key] for key in raw}
