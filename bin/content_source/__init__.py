"""Content storage collaborators: load and store raw document text by path and branch."""

from .api_client import ContentFile, GitHubContentClient
from .config import SourceConfig
from .exceptions import ApiError, ContentNotFoundError, ContentSourceError
from .local import LocalContentSource

__all__ = [
    "ApiError",
    "ContentFile",
    "ContentNotFoundError",
    "ContentSourceError",
    "GitHubContentClient",
    "LocalContentSource",
    "SourceConfig",
]
