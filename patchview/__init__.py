from .changes import build_change_files
from .config import Settings, get_settings
from .models import ChangeFile, CodeSection, HunkHeader, PatchParseResult, ReviewComment
from .patch_parser import parse_hunk_header, parse_patch
from .path_filter import PathFilter
from .prompts import render_hunk_pair, render_review_prompt
from .review import parse_review_comment

__all__ = [
    "ChangeFile",
    "CodeSection",
    "HunkHeader",
    "PatchParseResult",
    "PathFilter",
    "ReviewComment",
    "Settings",
    "build_change_files",
    "get_settings",
    "parse_hunk_header",
    "parse_patch",
    "parse_review_comment",
    "render_hunk_pair",
    "render_review_prompt",
]
