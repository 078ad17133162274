"""Job Schemas — posting and editing listings.

Invariants:
    - jobTitle: 1-200 chars, stripped, no "/" (lookup key and path segment)
    - companyRating: 0-5 when given
    - jobSkills / projectTypes: comma-delimited text or list, truncated downstream
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_job_title(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("jobTitle cannot be empty or whitespace")
    if "/" in v:
        raise ValueError("jobTitle cannot contain '/'")
    return v


class JobCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_title: str = Field(alias="jobTitle", min_length=1, max_length=200)
    company_name: str = Field(alias="companyName", min_length=1, max_length=200)
    job_description: str = Field(alias="jobDescription", min_length=1, max_length=10_000)
    job_skills: str | list[str] | None = Field(None, alias="jobSkills")
    project_types: str | list[str] | None = Field(None, alias="projectTypes")
    company_rating: float | None = Field(None, alias="companyRating", ge=0, le=5)

    @field_validator("job_title")
    @classmethod
    def strip_job_title(cls, v: str) -> str:
        return _clean_job_title(v)


class JobUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_title: str | None = Field(None, alias="jobTitle", min_length=1, max_length=200)
    company_name: str | None = Field(None, alias="companyName", min_length=1, max_length=200)
    job_description: str | None = Field(
        None, alias="jobDescription", min_length=1, max_length=10_000,
    )
    job_skills: str | list[str] | None = Field(None, alias="jobSkills")
    project_types: str | list[str] | None = Field(None, alias="projectTypes")
    company_rating: float | None = Field(None, alias="companyRating", ge=0, le=5)

    @field_validator("job_title")
    @classmethod
    def strip_job_title(cls, v: str | None) -> str | None:
        return _clean_job_title(v)
