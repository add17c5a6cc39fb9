"""Exceptions raised by content sources."""


class ContentSourceError(Exception):
    """Base class for content source failures"""


class ApiError(ContentSourceError):
    """A content API request failed"""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class ContentNotFoundError(ApiError):
    """The requested path does not exist on the branch"""

    def __init__(self, path: str, branch: str = ""):
        where = f" on branch '{branch}'" if branch else ""
        super().__init__(f"Content not found: {path}{where}", status_code=404)
        self.path = path
        self.branch = branch
