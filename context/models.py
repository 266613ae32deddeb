"""Structured input for a context update."""

from pydantic import BaseModel, ConfigDict, Field


class ContextUpdate(BaseModel):
    """What happened in a development session."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(min_length=1)
    completed: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list, alias="next")
    decisions: list[str] = Field(default_factory=list)
