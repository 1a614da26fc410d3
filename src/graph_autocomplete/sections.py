from __future__ import annotations
import re
from typing import Sequence

from .config import ROOT_SECTION_ALIASES
from .models import SectionInfo

SECTION_HEADER = re.compile(r"^(\s*)(nodes|links|edges)\s*:\s*$")

ROOT = SectionInfo(section="root", section_indent=0)


def canonical_section(name: str) -> str:
    return ROOT_SECTION_ALIASES.get(name, name)


def infer_section(lines: Sequence[str], line_index: int, indent: int) -> SectionInfo:
    """
    Innermost `nodes:` / `links:` (or `edges:`) header enclosing `line_index`.

    Scans upward; a header counts when it is indented less than `indent` or sits
    on the queried line itself. The first hit wins, which is what makes nested
    sections inside node entries resolve to the closest block.
    """
    start = min(line_index, len(lines) - 1)
    for i in range(start, -1, -1):
        m = SECTION_HEADER.match(lines[i] or "")
        if not m:
            continue
        section_indent = len(m.group(1))
        if section_indent < indent or i == line_index:
            return SectionInfo(section=canonical_section(m.group(2)), section_indent=section_indent)
    return ROOT
