"""Content source configuration."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class SourceConfig:
    """GitHub-backed content repository settings"""
    base_url: str = "https://api.github.com"
    owner: Optional[str] = None
    repo: Optional[str] = None
    default_branch: str = "main"
    content_root: str = "public/content"  # Directory holding the documents inside the repository
    token: Optional[str] = None
    timeout: float = 30.0  # Seconds per HTTP request

    def __post_init__(self):
        if self.owner is None:
            self.owner = os.environ.get('DOCS_GITHUB_OWNER', '')
        if self.repo is None:
            self.repo = os.environ.get('DOCS_GITHUB_REPO', '')
        if self.token is None:
            self.token = os.environ.get('GITHUB_TOKEN') or None
        self.base_url = self.base_url.rstrip('/')
        self.content_root = self.content_root.strip('/')

    def repo_path(self, path: str) -> str:
        """Repository path of a logical content path."""
        relative = path.strip().lstrip('/')
        if not self.content_root or relative == self.content_root or relative.startswith(self.content_root + '/'):
            return relative
        return f"{self.content_root}/{relative}"
