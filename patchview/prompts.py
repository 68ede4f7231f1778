# patchview/prompts.py
from typing import Optional

from .config import get_settings
from .models import PatchParseResult

REVIEW_PROMPT_TEMPLATE = """## Pull request
Title: {title}
Description:
{description}

## File
{filename}

{hunks}

## Instructions
Review the new hunk. Line numbers are given at the start of each new hunk line.
Reply with one section per issue, separated by a line containing only `---`:

<start_line>-<end_line>:
<comment>

If a range needs no change, write `LGTM!` as its comment.
Write the comments in {language}.
"""


def render_hunk_pair(pair: PatchParseResult) -> str:
    new_hunk = "\n".join(pair.modified.content)
    old_hunk = "\n".join(pair.original.content)
    return (
        "---new_hunk---\n"
        f"```\n{new_hunk}\n```\n"
        "\n"
        "---old_hunk---\n"
        f"```\n{old_hunk}\n```\n"
    )


def render_review_prompt(
    filename: str,
    pair: PatchParseResult,
    title: str = "",
    description: str = "",
    language: Optional[str] = None,
) -> str:
    """
    Build the review prompt for one hunk. `language` defaults to the
    REVIEW_LANGUAGE setting.
    """
    return REVIEW_PROMPT_TEMPLATE.format(
        title=title,
        description=description or "(none)",
        filename=filename,
        hunks=render_hunk_pair(pair).rstrip("\n"),
        language=language or get_settings().language,
    )
