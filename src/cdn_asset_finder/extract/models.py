from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Asset:
    repository: str
    filepath: str
    linenumber: int
    line: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
