"""GitHub contents API client."""

import base64
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from content_source.config import SourceConfig
from content_source.exceptions import ApiError, ContentNotFoundError, ContentSourceError
from text_utils import is_markdown_path


@dataclass(frozen=True)
class ContentFile:
    path: str
    branch: str
    text: str
    sha: str = ""


class GitHubContentClient:
    """Reads and writes document text through the GitHub contents API"""

    def __init__(self, config: SourceConfig, logger: logging.Logger):
        self.config = config
        self.logger = logger
        self.headers = {"Accept": "application/vnd.github.v3+json"}
        if config.token:
            self.headers["Authorization"] = f"Bearer {config.token}"

    def make_request(self, method: str, endpoint: str, description: str, **kwargs) -> Optional[Dict]:
        """Make API request and return the decoded JSON body"""
        url = f"{self.config.base_url}{endpoint}"
        try:
            self.logger.debug(f"Making {description} request: {method} {url}")
            response = requests.request(method, url, headers=self.headers, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            self.logger.error(f"Error making {description} request to {url}: {str(e)}")
            raise ApiError(f"Failed to make {description} request: {str(e)}") from e

        if response.status_code == 404:
            raise ContentNotFoundError(endpoint)
        if not response.ok:
            message = _error_message(response)
            self.logger.error(f"GitHub API error for {description} request to {url}: {message}")
            raise ApiError(f"Failed to make {description} request: {message}", status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    def get_file(self, path: str, branch: Optional[str] = None) -> ContentFile:
        """Fetch one file; its base64 content is decoded as UTF-8"""
        branch = branch or self.config.default_branch
        repo_path = self.config.repo_path(path)
        try:
            data = self.make_request("GET", self._contents_endpoint(repo_path), "contents",
                                     params={"ref": branch})
        except ContentNotFoundError as e:
            raise ContentNotFoundError(repo_path, branch) from e

        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise ApiError(f"Not a file: {repo_path}")
        text = base64.b64decode(data.get("content") or "").decode("utf-8")
        return ContentFile(path=repo_path, branch=branch, text=text, sha=data.get("sha") or "")

    def get_text(self, path: str, branch: Optional[str] = None) -> str:
        return self.get_file(path, branch).text

    def put_text(self, path: str, text: str, branch: Optional[str] = None,
                 message: Optional[str] = None, sha: Optional[str] = None) -> str:
        """Create or update a file on ``branch`` and return the new blob sha.

        When ``sha`` is not given, the current file's sha is looked up; a missing
        file is created.
        """
        branch = branch or self.config.default_branch
        repo_path = self.config.repo_path(path)
        if sha is None:
            try:
                sha = self.get_file(path, branch).sha
            except ContentNotFoundError:
                self.logger.info(f"{repo_path} does not exist on {branch}, creating it")

        body = {
            "message": message or f"Update {repo_path}",
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            body["sha"] = sha

        data = self.make_request("PUT", self._contents_endpoint(repo_path), "contents update", json=body)
        self.logger.info(f"Updated {repo_path} on {branch}")
        return ((data or {}).get("content") or {}).get("sha", "")

    def list_markdown_files(self, branch: Optional[str] = None) -> List[str]:
        """List .md/.mdx files under the content root, sorted"""
        branch = branch or self.config.default_branch
        data = self.make_request("GET", f"{self._repo_endpoint()}/git/trees/{quote(branch, safe='')}",
                                 "git tree", params={"recursive": "1"}) or {}
        if data.get("truncated"):
            self.logger.warning(f"Tree listing for {branch} was truncated by the API")

        prefix = f"{self.config.content_root}/" if self.config.content_root else ""
        paths = [
            item["path"]
            for item in data.get("tree", [])
            if item.get("type") == "blob"
            and item.get("path", "").startswith(prefix)
            and is_markdown_path(item["path"])
        ]
        self.logger.info(f"Found {len(paths)} markdown files on {branch}")
        return sorted(paths)

    def _repo_endpoint(self) -> str:
        if not self.config.owner or not self.config.repo:
            raise ContentSourceError("Repository owner and name are required")
        return f"/repos/{quote(self.config.owner)}/{quote(self.config.repo)}"

    def _contents_endpoint(self, repo_path: str) -> str:
        return f"{self._repo_endpoint()}/contents/{quote(repo_path)}"


def _error_message(response: requests.Response) -> str:
    message = f"{response.status_code} {response.reason}"
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return f"{message} - {data['message']}"
    if response.text:
        return f"{message} - {response.text}"
    return message
