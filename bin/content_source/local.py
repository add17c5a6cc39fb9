"""Directory-backed content source."""

import logging
from pathlib import Path
from typing import List, Optional

from content_source.api_client import ContentFile
from content_source.exceptions import ContentNotFoundError, ContentSourceError
from text_utils import is_markdown_path


class LocalContentSource:
    """Same operations as GitHubContentClient over a local directory.

    Branches do not exist locally; the ``branch`` argument is accepted and ignored.
    """

    def __init__(self, root: Path, logger: Optional[logging.Logger] = None):
        self.root = Path(root)
        self.logger = logger or logging.getLogger(__name__)

    def get_file(self, path: str, branch: Optional[str] = None) -> ContentFile:
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise ContentNotFoundError(path)
        return ContentFile(path=path, branch=branch or "", text=file_path.read_text(encoding="utf-8"))

    def get_text(self, path: str, branch: Optional[str] = None) -> str:
        return self.get_file(path, branch).text

    def put_text(self, path: str, text: str, branch: Optional[str] = None,
                 message: Optional[str] = None, sha: Optional[str] = None) -> str:
        file_path = self._resolve(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(text, encoding="utf-8")
        self.logger.info(f"Wrote {file_path}")
        return ""

    def list_markdown_files(self, branch: Optional[str] = None) -> List[str]:
        if not self.root.is_dir():
            raise ContentSourceError(f"Content directory not found: {self.root}")
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in self.root.rglob("*")
            if p.is_file() and is_markdown_path(p.name)
        )

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        file_path = (root / path.strip().lstrip("/")).resolve()
        if file_path != root and root not in file_path.parents:
            raise ContentSourceError(f"Path escapes the content directory: {path}")
        return file_path
