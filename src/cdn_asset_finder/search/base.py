from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol


@dataclass(frozen=True)
class SearchResultItem:
    owner_login: str
    repository_name: str
    path: str

    @property
    def file_key(self) -> str:
        return f"{self.repository_name}/{self.path}"

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "SearchResultItem":
        repo = item["repository"]
        return cls(
            owner_login=repo["owner"]["login"],
            repository_name=repo["name"],
            path=item["path"],
        )


@dataclass
class SearchPage:
    items: List[SearchResultItem] = field(default_factory=list)
    total_count: int = 0


class CodeSearchClient(Protocol):
    async def search(self, term: str, page: int = 1) -> SearchPage:
        ...

    async def search_all(self, term: str) -> List[SearchResultItem]:
        ...
