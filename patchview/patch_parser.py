# patchview/patch_parser.py
"""
Unified-diff patch parsing.

Turns the `patch` field of a changed file, as returned by the hosting API, into
one `PatchParseResult` per `@@ -a,b +c,d @@` hunk. Each result holds the
pre-change view (raw lines, no numbering) and the post-change view (every line
after the first prefixed with its line number in the new file).

Unresolved merge-conflict blocks inside a hunk are decomposed: the "ours" side
goes to the pre-change view, the "theirs" side to the post-change view, and the
branch labels and commit id from the markers are kept on the sections.

Nothing here raises on bad input. Unparsable headers are skipped and truncated
conflict blocks yield whatever was collected.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .models import CodeSection, HunkHeader, PatchParseResult

logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"^@@ -(\d+),(\d+) \+(\d+),(\d+) @@(?: (.*))?$")
CONFLICT_TRAILER_RE = re.compile(r">>>>>>> (\w+)\s+\(([^)]+)\)")

CONFLICT_START = "<<<<<<<"
CONFLICT_SEPARATOR = "======="
CONFLICT_END = ">>>>>>>"


class ScanState(str, Enum):
    SCANNING_HEADER_AWAIT = "scanning_header_await"
    IN_HUNK = "in_hunk"
    IN_CONFLICT = "in_conflict"


@dataclass
class ConflictBlock:
    original_lines: list[str] = field(default_factory=list)
    modified_lines: list[str] = field(default_factory=list)
    original_branch: Optional[str] = None
    modified_branch: Optional[str] = None
    commit_id: Optional[str] = None
    next_index: int = 0
    next_line_no: int = 0


@dataclass
class _HunkState:
    index: int
    next_line_no: int
    original: list[str]
    modified: list[str]
    phase: ScanState = ScanState.SCANNING_HEADER_AWAIT
    original_branch: Optional[str] = None
    modified_branch: Optional[str] = None
    commit_id: Optional[str] = None

    def absorb(self, block: ConflictBlock) -> None:
        self.original.extend(block.original_lines)
        self.modified.extend(block.modified_lines)
        # the last block in a hunk wins
        self.original_branch = block.original_branch
        self.modified_branch = block.modified_branch
        self.commit_id = block.commit_id
        self.index = block.next_index
        self.next_line_no = block.next_line_no


def parse_hunk_header(line: str) -> Optional[HunkHeader]:
    """
    Decode `@@ -a,b +c,d @@ context`. Both counts are required, so the
    short single-line form `@@ -3 +3 @@` is not recognised.
    """
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None

    return HunkHeader(
        from_start=int(match.group(1)),
        from_count=int(match.group(2)),
        to_start=int(match.group(3)),
        to_count=int(match.group(4)),
        context=match.group(5) or "",
    )


def classify_line(
    line: str,
    next_line_no: int,
    original: list[str],
    modified: list[str],
) -> int:
    """
    Append one non-conflict body line to the view(s) it belongs to and return
    the post-change line number for the following line.
    """
    if line.startswith("+"):
        modified.append(f"{next_line_no} {line}")
        return next_line_no + 1

    if line.startswith("-"):
        original.append(line)
        return next_line_no

    original.append(line)
    modified.append(f"{next_line_no} {line}")
    return next_line_no + 1


def _marker_text(line: str) -> str:
    # conflict markers committed into a file show up as added lines
    return line.lstrip("+")


def _hunk_ends(lines: list[str], i: int) -> bool:
    return i >= len(lines) or lines[i].startswith("@@")


def decode_conflict_block(lines: list[str], index: int, next_line_no: int) -> ConflictBlock:
    """
    Consume a conflict block whose `<<<<<<<` marker sits at `lines[index]`.

    Lines before `=======` are the pre-change side and are kept verbatim.
    Lines before `>>>>>>>` are the post-change side and get line numbers. The
    closing marker `>>>>>>> <commit> (<branch>)` supplies the commit id and
    post-change branch when it is well formed.

    A block that is not closed stops at the next hunk header or the end of
    input, whichever comes first.
    """
    parts = lines[index].split()
    block = ConflictBlock(original_branch=parts[1] if len(parts) > 1 else None)

    i = index + 1
    while not _hunk_ends(lines, i) and not _marker_text(lines[i]).startswith(CONFLICT_SEPARATOR):
        block.original_lines.append(lines[i])
        i += 1

    if _hunk_ends(lines, i):
        logger.debug(f"Conflict block opened at line {index} has no separator")
        block.next_index = i
        block.next_line_no = next_line_no
        return block

    # separator
    i += 1

    while not _hunk_ends(lines, i) and not _marker_text(lines[i]).startswith(CONFLICT_END):
        block.modified_lines.append(f"{next_line_no} {lines[i]}")
        next_line_no += 1
        i += 1

    if _hunk_ends(lines, i):
        logger.debug(f"Conflict block opened at line {index} is not closed")
    else:
        trailer = CONFLICT_TRAILER_RE.search(lines[i])
        if trailer:
            block.commit_id = trailer.group(1)
            block.modified_branch = trailer.group(2)
        else:
            logger.debug(f"Unrecognised conflict trailer: {lines[i]!r}")
        i += 1

    block.next_index = i
    block.next_line_no = next_line_no
    return block


def scan_hunk(
    lines: list[str],
    start: int,
    filename: str,
) -> tuple[Optional[PatchParseResult], int]:
    """
    Parse the hunk whose header is `lines[start]`.

    Returns the parsed pair (or None when the header is unparsable) and the
    index of the first line not consumed.
    """
    header = parse_hunk_header(lines[start])
    if header is None:
        logger.debug(f"Skipping unparsable hunk header in {filename}: {lines[start]!r}")
        return None, start + 1

    state = _HunkState(
        index=start + 1,
        next_line_no=header.to_start,
        original=[header.context],
        modified=[header.context],
        phase=ScanState.IN_HUNK,
    )

    while state.phase is not ScanState.SCANNING_HEADER_AWAIT:
        if state.phase is ScanState.IN_CONFLICT:
            state.absorb(decode_conflict_block(lines, state.index, state.next_line_no))
            state.phase = ScanState.IN_HUNK
        elif _hunk_ends(lines, state.index):
            state.phase = ScanState.SCANNING_HEADER_AWAIT
        elif CONFLICT_START in lines[state.index]:
            state.phase = ScanState.IN_CONFLICT
        else:
            state.next_line_no = classify_line(
                lines[state.index], state.next_line_no, state.original, state.modified
            )
            state.index += 1

    result = PatchParseResult(
        original=CodeSection(
            filename=filename,
            start_line=header.from_start,
            line_count=header.from_count,
            content=state.original,
            branch=state.original_branch,
        ),
        modified=CodeSection(
            filename=filename,
            start_line=header.to_start,
            line_count=header.to_count,
            content=state.modified,
            branch=state.modified_branch,
            commit_id=state.commit_id,
        ),
    )
    return result, state.index


def parse_patch(filename: str, patch: Optional[str] = None) -> list[PatchParseResult]:
    """
    Parse every hunk of a single file's patch, in source order.

    An empty or missing patch (binary files, oversized diffs) gives an empty
    list. File header lines such as `diff --git`, `---` and `+++` are ignored.
    """
    results: list[PatchParseResult] = []
    if not patch:
        return results

    lines = patch.split("\n")
    if patch.endswith("\n"):
        lines.pop()

    i = 0
    while i < len(lines):
        if lines[i].startswith("@@"):
            result, i = scan_hunk(lines, i, filename)
            if result is not None:
                results.append(result)
        else:
            i += 1

    logger.debug(f"Parsed {len(results)} hunk(s) from {filename}")
    return results
