"""
Request and payload schemas.

Inbound payloads use the camelCase wire names (``companyId``,
``workmode``, ``EmpType``...) but snake_case field names are accepted too.
Validation failures surface as pydantic.ValidationError and are mapped
to VALIDATION_ERROR envelopes by the action layer.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .buckets import EXPERIENCE_BUCKETS, SALARY_BUCKETS
from .env import DEFAULT_JOBS_PER_PAGE
from .normalize import normalize_text, normalize_work_mode

MAX_PAGE_SIZE = 100


class WorkMode(str, Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"


class EmploymentType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    INTERNSHIP = "internship"
    CONTRACT = "contract"


class JobCategory(str, Enum):
    ENGINEERING = "engineering"
    DESIGN = "design"
    PRODUCT = "product"
    MARKETING = "marketing"
    SALES = "sales"
    OPERATIONS = "operations"
    DATA = "data"
    OTHER = "other"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _coerce_work_mode(value):
    if isinstance(value, str):
        return normalize_work_mode(value)
    return value


def _coerce_employment_type(value):
    if isinstance(value, str):
        return normalize_text(value).replace("-", "_").replace(" ", "_")
    return value


class JobPostSchema(_WireModel):
    """Payload for creating or fully replacing a job."""

    title: str = Field(min_length=2, max_length=200)
    description: str = Field(min_length=2)
    company_id: str = Field(min_length=1)
    type: EmploymentType
    category: JobCategory
    application: str = Field(min_length=1)
    city: str = Field(min_length=1)
    address: str = Field(min_length=1)
    work_mode: WorkMode
    skills: List[str] = Field(default_factory=list)

    has_salary_range: bool = False
    min_salary: Optional[NonNegativeInt] = None
    max_salary: Optional[NonNegativeInt] = None

    has_experience_range: bool = Field(default=False, alias="hasExperiencerange")
    min_experience: Optional[NonNegativeInt] = None
    max_experience: Optional[NonNegativeInt] = None

    has_expiry_date: bool = False
    expiry_date: Optional[datetime] = None

    @field_validator("work_mode", mode="before")
    @classmethod
    def _work_mode(cls, v):
        return _coerce_work_mode(v)

    @field_validator("type", mode="before")
    @classmethod
    def _employment_type(cls, v):
        return _coerce_employment_type(v)

    @field_validator("expiry_date")
    @classmethod
    def _naive_local(cls, v: Optional[datetime]) -> Optional[datetime]:
        # stored naive in local time, like posted_at
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @field_validator("skills")
    @classmethod
    def _skills(cls, v: List[str]) -> List[str]:
        seen = []
        for skill in (s.strip() for s in v):
            if skill and skill not in seen:
                seen.append(skill)
        return seen

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.has_salary_range:
            if self.min_salary is None or self.max_salary is None:
                raise ValueError("minSalary and maxSalary are required when hasSalaryRange is true")
            if self.min_salary > self.max_salary:
                raise ValueError("minSalary must not exceed maxSalary")
        else:
            self.min_salary = None
            self.max_salary = None

        if self.has_experience_range:
            if self.min_experience is None or self.max_experience is None:
                raise ValueError(
                    "minExperience and maxExperience are required when hasExperiencerange is true"
                )
            if self.min_experience > self.max_experience:
                raise ValueError("minExperience must not exceed maxExperience")
        else:
            self.min_experience = None
            self.max_experience = None

        if self.has_expiry_date:
            if self.expiry_date is None:
                raise ValueError("expiryDate is required when hasExpiryDate is true")
        else:
            self.expiry_date = None
        return self


class JobQuerySchema(_WireModel):
    """Filters, sort and pagination for the public job listing."""

    work_mode: List[WorkMode] = Field(default_factory=list, alias="workmode")
    emp_type: List[EmploymentType] = Field(default_factory=list, alias="EmpType")
    salary_range: List[str] = Field(default_factory=list, alias="salaryrange")
    experience: List[str] = Field(default_factory=list)
    city: List[str] = Field(default_factory=list)
    search: Optional[str] = None
    sortby: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_JOBS_PER_PAGE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("work_mode", mode="before")
    @classmethod
    def _work_modes(cls, v):
        return [_coerce_work_mode(item) for item in v] if isinstance(v, list) else v

    @field_validator("emp_type", mode="before")
    @classmethod
    def _employment_types(cls, v):
        return [_coerce_employment_type(item) for item in v] if isinstance(v, list) else v

    @field_validator("salary_range")
    @classmethod
    def _salary_buckets(cls, v: List[str]) -> List[str]:
        unknown = [label for label in v if label not in SALARY_BUCKETS]
        if unknown:
            raise ValueError(f"unknown salary range(s): {', '.join(unknown)}")
        return v

    @field_validator("experience")
    @classmethod
    def _experience_buckets(cls, v: List[str]) -> List[str]:
        unknown = [label for label in v if label not in EXPERIENCE_BUCKETS]
        if unknown:
            raise ValueError(f"unknown experience range(s): {', '.join(unknown)}")
        return v

    @field_validator("city")
    @classmethod
    def _cities(cls, v: List[str]) -> List[str]:
        return [c for c in v if c]

    @field_validator("search")
    @classmethod
    def _search(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class JobByIdSchema(_WireModel):
    id: str = Field(min_length=1)


class RecommendedJobSchema(_WireModel):
    id: str = Field(min_length=1)
    category: JobCategory


# Outbound payloads: read from ORM objects by attribute name, written
# out under camelCase keys.


class _PayloadModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class CompanyPayload(_PayloadModel):
    id: str
    name: str
    bio: str
    logo: Optional[str] = None


class JobPayload(_PayloadModel):
    """Public view of a job, expanded with its company's public fields."""

    id: str
    title: str
    description: str
    company_id: str
    type: str
    category: str
    work_mode: str
    city: str
    address: str
    application: str
    skills: List[str]
    has_salary_range: bool
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    has_experience_range: bool = Field(serialization_alias="hasExperiencerange")
    min_experience: Optional[int] = None
    max_experience: Optional[int] = None
    has_expiry_date: bool
    expiry_date: Optional[datetime] = None
    posted_at: datetime
    company: Optional[CompanyPayload] = None


def dump_job(job) -> dict:
    """Shape an ORM Job (company loaded) into its wire dict."""
    return JobPayload.model_validate(job).model_dump(by_alias=True, mode="json")
