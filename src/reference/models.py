"""Reference models.

A reference points at a location in a source file: either a single line
(a cursor) or an inclusive range of lines (a selection). Line numbers in
these models are 1-based.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator


class ReferenceType(str, Enum):
    """How a reference is rendered."""

    SYMBOL = "Symbol"
    FILENAME_WITH_LINE = "Filename (with line)"
    FILENAME_NO_LINE = "Filename (no line)"


# Accepted by configuration written before the line/no-line split.
LEGACY_FILENAME = "Filename"

REFERENCE_TYPES: tuple[str, ...] = tuple(t.value for t in ReferenceType)


class CursorRange(BaseModel):
    kind: Literal["cursor"] = "cursor"
    line: int = Field(ge=1)


class SelectionRange(BaseModel):
    kind: Literal["selection"] = "selection"
    start_line: int = Field(ge=1)
    end_line: int = Field(ge=1)

    @model_validator(mode="after")
    def check_order(self) -> SelectionRange:
        if self.start_line > self.end_line:
            msg = (
                f"start_line ({self.start_line}) must not exceed "
                f"end_line ({self.end_line})"
            )
            raise ValueError(msg)
        return self


ReferenceRange = Annotated[CursorRange | SelectionRange, Field(discriminator="kind")]


class Reference(BaseModel):
    """A resolved reference to a file location within a workspace."""

    type: ReferenceType
    range: ReferenceRange
    workspace_path: str
    relative_path: str = Field(
        description="Path relative to the workspace folder (absolute without one)"
    )
    file_name: str
    git_root: str | None = None
    path_from_git_root: str | None = Field(
        default=None, description="Path relative to the repository root"
    )


__all__ = [
    "LEGACY_FILENAME",
    "REFERENCE_TYPES",
    "CursorRange",
    "Reference",
    "ReferenceRange",
    "ReferenceType",
    "SelectionRange",
]
