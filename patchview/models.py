from typing import Optional

from pydantic import BaseModel, Field, model_validator


class HunkHeader(BaseModel):
    from_start: int
    from_count: int
    to_start: int
    to_count: int
    context: str = ""

    model_config = {"frozen": True}


class CodeSection(BaseModel):
    """
    One side (pre- or post-change) of a single hunk.

    `line_count` is the count declared by the hunk header. It is never derived
    from `content`, which may be shorter or longer once conflict markers have
    been consumed.
    """

    filename: str
    start_line: int = Field(..., alias="startLine")
    line_count: int = Field(..., alias="lineCount")
    content: list[str] = Field(default_factory=list)
    branch: Optional[str] = None
    commit_id: Optional[str] = Field(None, alias="commitId")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def content_mismatch(self) -> bool:
        # first entry is the header context line, not a counted row
        return len(self.content) - 1 != self.line_count


class PatchParseResult(BaseModel):
    original: CodeSection
    modified: CodeSection

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _same_file(self) -> "PatchParseResult":
        if self.original.filename != self.modified.filename:
            raise ValueError("original and modified sections must share a filename")
        return self


class ChangeFile(BaseModel):
    filename: str
    sha: str
    status: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    url: str = Field("", alias="blob_url")
    hunks: list[PatchParseResult] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}


class ReviewComment(BaseModel):
    start_line: int = Field(..., alias="startLine")
    end_line: int = Field(..., alias="endLine")
    comment: str
    is_lgtm: bool = Field(False, alias="isLGTM")

    model_config = {"populate_by_name": True, "frozen": True}
