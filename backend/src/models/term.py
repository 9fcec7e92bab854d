"""Term models."""

from typing import List

from pydantic import BaseModel, Field


def normalize_term(text: str) -> str:
    """Normalize display text for case-insensitive matching."""
    return " ".join(text.lower().split())


class Term(BaseModel):
    """Term model."""

    id: int = Field(..., description="Unique term identifier")
    display_text: str = Field(..., description="Term as shown to users")
    searchable_text: str = Field(..., description="Normalized text used for matching")
    count: int = Field(0, ge=0, description="Number of content objects using the term")

    @classmethod
    def create(cls, id: int, display_text: str, count: int = 0) -> "Term":
        """Create a term deriving its searchable text."""
        return cls(
            id=id,
            display_text=display_text,
            searchable_text=normalize_term(display_text),
            count=count
        )


class WeightedTerm(BaseModel):
    """Term paired with its visual weight class."""

    term: Term
    weight: int = Field(..., ge=1, le=6, description="Visual weight class")

    @property
    def css_class(self) -> str:
        """CSS class used by the tag collection template."""
        return f"wt{self.weight}"


class TagListing(BaseModel):
    """Weighted view of a term set."""

    terms: List[WeightedTerm] = Field(default_factory=list)
    minimum: int = 0
    maximum: int = 0
    query: str = ""


class DeleteResult(BaseModel):
    """Names of the terms removed by a delete."""

    deleted_names: List[str] = Field(default_factory=list)


class MergeResult(BaseModel):
    """Names of the terms folded into the canonical term."""

    canonical_name: str
    merged_names: List[str] = Field(default_factory=list)
