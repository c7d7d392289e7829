"""
Tentative-schedule marker carried in the first line of an event description.

    [TENTATIVE] awaiting venue confirmation
    Quarterly planning with all cluster heads.

The first line holds the marker and an optional note; the remaining lines are
the real description.
"""
import re
from dataclasses import dataclass
from typing import Optional

from config.constants import TENTATIVE_PREFIX

_MARKER = re.compile(r"^\[TENTATIVE\]\s*(.+)?$", re.IGNORECASE)


@dataclass(frozen=True)
class TentativeMeta:
    is_tentative: bool
    note: str
    plain_description: str


def parse_tentative_description(raw_description: Optional[str]) -> TentativeMeta:
    raw = str(raw_description or "")
    if not raw:
        return TentativeMeta(False, "", "")

    lines = raw.replace("\r\n", "\n").split("\n")
    match = _MARKER.match(lines[0].strip())
    if not match:
        return TentativeMeta(False, "", raw)

    note = (match.group(1) or "").strip()
    plain_description = "\n".join(lines[1:]).strip()
    return TentativeMeta(True, note, plain_description)


def build_tentative_description(is_tentative: bool, note: Optional[str], plain_description: Optional[str]) -> Optional[str]:
    """Inverse of parse_tentative_description; None when nothing is left to store."""
    clean_desc = str(plain_description or "").strip()
    if not is_tentative:
        return clean_desc or None
    clean_note = str(note or "").strip()
    first_line = f"{TENTATIVE_PREFIX} {clean_note}" if clean_note else TENTATIVE_PREFIX
    return f"{first_line}\n{clean_desc}" if clean_desc else first_line
