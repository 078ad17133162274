"""Portfolio & Comment Schemas.

Invariants:
    - title: 1-200 chars, stripped, no "/" (it is a lookup key and a path segment)
    - Image slots mirror the three-slot form (imageOfOne..imageOfThree)
    - comment: 1-5000 chars, stripped
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showcase.core.bounded import collect_images


def _clean_title(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty or whitespace")
    if "/" in v:
        raise ValueError("title cannot contain '/'")
    return v


class _ImageSlots(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_of_one: str | None = Field(None, alias="imageOfOne", max_length=500)
    image_of_two: str | None = Field(None, alias="imageOfTwo", max_length=500)
    image_of_three: str | None = Field(None, alias="imageOfThree", max_length=500)

    def image_list(self) -> list[str] | None:
        slots = (self.image_of_one, self.image_of_two, self.image_of_three)
        if all(s is None for s in slots):
            return None
        return collect_images(*slots)


class PortfolioCreate(_ImageSlots):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=10_000)
    tags: str | list[str] | None = None
    url: str | None = Field(None, max_length=500)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _clean_title(v)


class PortfolioUpdate(_ImageSlots):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=10_000)
    tags: str | list[str] | None = None
    url: str | None = Field(None, max_length=500)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _clean_title(v)


class CommentForm(BaseModel):
    comment: str = Field(min_length=1, max_length=5000)

    @field_validator("comment")
    @classmethod
    def strip_comment(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("comment cannot be empty or whitespace")
        return v
