"""
Pydantic models for API request/response validation.
Auto-generates OpenAPI documentation.

Stored documents use camelCase keys; the models expose snake_case
attributes and serialize back to the stored names by alias.
"""

import copy
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


logger = logging.getLogger(__name__)

Number = Union[int, float]


def _field_path(document: Any, loc: Sequence) -> Tuple:
    """Keys leading to the deepest dict entry of `document` on an error `loc`."""
    path = []
    current = document
    for part in loc:
        if not isinstance(current, dict) or part not in current:
            break
        path.append(part)
        current = current[part]
    return tuple(path)


def _drop_field(document: Dict, path: Tuple):
    parent = document
    for key in path[:-1]:
        parent = parent.get(key)
        if not isinstance(parent, dict):
            return
    parent.pop(path[-1], None)


class SalaryBand(BaseModel):
    """Compensation for a company's openings."""
    model_config = ConfigDict(extra="allow")

    base: Optional[Number] = None
    bonus: Optional[Number] = None


class HiringCriteria(BaseModel):
    """What a company looks for in candidates."""
    model_config = ConfigDict(extra="allow")

    skills: Optional[List[str]] = None


class Company(BaseModel):
    """
    One document of the companies collection.

    Every field except the identifier is optional; absence means
    "unspecified". Unknown document keys are carried through as extras.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    location: Optional[str] = None
    headcount: Optional[int] = Field(None, ge=0)
    salary_band: Optional[SalaryBand] = Field(None, alias="salaryBand")
    benefits: Optional[List[str]] = None
    hiring_criteria: Optional[HiringCriteria] = Field(None, alias="hiringCriteria")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        # ObjectId and friends render as their hex string
        return None if value is None else str(value)

    @property
    def skills(self) -> List[str]:
        if self.hiring_criteria is None:
            return []
        return self.hiring_criteria.skills or []

    @property
    def base_salary(self) -> Optional[Number]:
        return self.salary_band.base if self.salary_band else None

    @property
    def bonus(self) -> Optional[Number]:
        return self.salary_band.bonus if self.salary_band else None

    @classmethod
    def from_document(cls, document: Dict) -> Optional["Company"]:
        """
        Validate a stored document, degrading malformed fields instead of failing.

        Each field that fails validation is dropped (so it reads as
        unspecified) and a warning is logged. Returns None when the
        document cannot be repaired that way, e.g. it has no identifier
        where one is required.
        """
        doc = copy.deepcopy(document)
        ident = doc.get("_id") if isinstance(doc, dict) else None
        while True:
            try:
                return cls.model_validate(doc)
            except ValidationError as e:
                paths = []
                for error in e.errors():
                    path = _field_path(doc, error["loc"])
                    if path and path not in paths:
                        paths.append(path)
                if not paths:
                    logger.warning(f"Skipping company {ident}: {e.error_count()} invalid field(s)")
                    return None
                for path in paths:
                    _drop_field(doc, path)
                dropped = ", ".join(".".join(str(key) for key in path) for path in paths)
                logger.warning(f"Company {ident}: ignoring invalid {dropped}")


class StoredCompany(Company):
    """A company as served by the API. Stored documents always carry `_id`."""

    id: str = Field(alias="_id")


class CompanyListResponse(BaseModel):
    """Envelope for every list endpoint."""
    items: List[StoredCompany]


class CountResponse(BaseModel):
    """Envelope for the count endpoint."""
    total: int


class ErrorResponse(BaseModel):
    """Error response."""
    error: str


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    database: str
    collection: str
    total_companies: int
