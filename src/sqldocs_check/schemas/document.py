"""Document and section models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from sqldocs_check.schemas.table import Table


class QuerySection(BaseModel):
    """A fenced SQL code block under a heading."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["query"] = "query"
    label: str
    line: int = Field(..., ge=1)
    sql: str
    language: str | None = None


class TableSection(BaseModel):
    """An example table under a heading."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    label: str
    line: int = Field(..., ge=1)
    table: Table


Section = Annotated[Union[QuerySection, TableSection], Field(discriminator="kind")]


class Document(BaseModel):
    """A parsed topic page.

    Attributes:
        identifier: File path or title used to name the document in reports.
        title: Text of the level-1 heading.
        purpose: First prose paragraph after the title, if any.
        sections: Query and table sections in source order.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    purpose: str | None = None
    sections: tuple[Section, ...] = ()
