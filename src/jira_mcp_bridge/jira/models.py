"""Pydantic models for Jira request bodies and response envelopes.

Response models only check the top-level shape; everything else is kept as
extra data and the caller always gets the raw parsed body back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class SearchParams(BaseModel):
    """Body of ``POST /rest/api/2/search``."""

    jql: str
    max_results: int = Field(alias="maxResults", default=50)
    fields: list[str] | None = None

    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class JiraIssue(BaseModel):
    model_config = ConfigDict(extra="allow")


class JiraSearchResponse(BaseModel):
    issues: list[JiraIssue]
    total: int = 0

    model_config = ConfigDict(extra="allow")


class JiraProject(BaseModel):
    model_config = ConfigDict(extra="allow")


class JiraIssueType(BaseModel):
    model_config = ConfigDict(extra="allow")


ProjectList = TypeAdapter(list[JiraProject])
IssueTypeList = TypeAdapter(list[JiraIssueType])
