from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import os
import yaml


@dataclass
class GitHubApiConfig:
    token: Optional[str] = None
    org: Optional[str] = None
    api_url: Optional[str] = None


@dataclass
class ApiConfig:
    github: GitHubApiConfig = field(default_factory=GitHubApiConfig)


def load_api_config(path: Optional[str | Path]) -> ApiConfig:
    """Load GitHub API config from YAML, merging with environment fallbacks.

    Precedence:
      1) YAML file values (if provided)
      2) Environment variables (GITHUB_TOKEN, GITHUB_ORG, GITHUB_API_URL)
    """

    cfg = ApiConfig()
    data = {}
    if path:
        p = Path(path)
        if p.is_file():
            with p.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
    else:
        # Try common defaults
        for candidate in ("github.yaml", "github.yml", "config/github.yaml"):
            pc = Path(candidate)
            if pc.is_file():
                with pc.open("r", encoding="utf-8") as fh:
                    data = yaml.safe_load(fh) or {}
                break

    gh = (data or {}).get("github") or {}

    cfg.github.token = gh.get("token") or os.environ.get("GITHUB_TOKEN")
    cfg.github.org = gh.get("org") or os.environ.get("GITHUB_ORG")
    cfg.github.api_url = gh.get("api_url") or os.environ.get("GITHUB_API_URL")

    return cfg
