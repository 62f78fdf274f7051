from __future__ import annotations

import re
from typing import List

from .models import Asset


# <script ... src="…/name.js"> ; group 1 is the filename after the last "/"
SCRIPT_SRC_RX = re.compile(r"<script\s+[^>]*src=[\"'][^\"']*/([^\"']+\.js)[\"']", re.IGNORECASE)

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_ESCAPE_RX = re.compile(r"[&<>\"']")


def escape_html(text: str) -> str:
    return _HTML_ESCAPE_RX.sub(lambda m: _HTML_ESCAPES[m.group(0)], text)


def extract_assets(content: str, pattern: re.Pattern[str], repo: str, path: str) -> List[Asset]:
    """Scan ``content`` line by line and return one Asset per matching line.

    Line numbers are 1-based. Only matched lines are escaped; the captured
    filename is kept verbatim.
    """
    assets: List[Asset] = []
    for idx, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        m = pattern.search(line)
        if m:
            assets.append(
                Asset(
                    repository=repo,
                    filepath=path,
                    linenumber=idx,
                    line=escape_html(line),
                    name=m.group(1),
                )
            )
    return assets
