# patchview/review.py
import re

from .models import ReviewComment

SECTION_RE = re.compile(r"^(\d+)-(\d+):?\s*(.+)$", re.DOTALL)


def parse_review_comment(text: str) -> list[ReviewComment]:
    """
    Parse a model review reply of the form

        10-15:
        comment text
        ---
        20-25:
        another comment

    Sections that don't start with a line range are dropped.
    """
    if not text or not text.strip():
        return []

    comments: list[ReviewComment] = []

    for section in text.split("---"):
        section = section.strip()
        if not section:
            continue

        match = SECTION_RE.match(section)
        if not match:
            continue

        comment = match.group(3).strip()
        comments.append(
            ReviewComment(
                start_line=int(match.group(1)),
                end_line=int(match.group(2)),
                comment=comment,
                is_lgtm="lgtm!" in comment.lower(),
            )
        )

    return comments
