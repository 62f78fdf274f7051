from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..extract.models import Asset


HEADERS = ["Repository", "File Path", "Line Number", "Line", "Asset Name"]


def to_markdown_table(assets: Sequence[Asset]) -> str:
    header_row = f"| {' | '.join(HEADERS)} |"
    separator_row = f"| {' | '.join('---' for _ in HEADERS)} |"
    rows: List[str] = [header_row, separator_row]
    for a in assets:
        rows.append(f"| {a.repository} | {a.filepath} | {a.linenumber} | {a.line} | {a.name} |")
    return "\n".join(rows)


def write_report(assets: Sequence[Asset], out_path: str | Path) -> Optional[Path]:
    """Write the markdown table to ``out_path``; nothing is written for zero assets."""
    if not assets:
        return None
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_markdown_table(assets), encoding="utf-8")
    return out
