import re
from urllib.parse import urlparse

import httpx

from repo_composer.classify import classify
from repo_composer.models import FileEntry, RepositoryMetadata


class GitHubError(Exception):
    def __init__(self, message: str, status_code: int = 502):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidRepoUrlError(GitHubError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class NotFoundError(GitHubError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class RateLimitedError(GitHubError):
    def __init__(self, message: str = "GitHub API rate limit exceeded"):
        super().__init__(message, status_code=429)


class TransientNetworkError(GitHubError):
    def __init__(self, message: str):
        super().__init__(message, status_code=502)


def parse_github_url(url: str) -> tuple[str, str]:
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]

    parsed = urlparse(url)
    if parsed.hostname not in ("github.com", "www.github.com"):
        raise InvalidRepoUrlError("Not a GitHub URL")

    parts = [p for p in parsed.path.strip("/").split("/") if p]
    if len(parts) < 2:
        raise InvalidRepoUrlError("Invalid GitHub repository URL — expected github.com/owner/repo")

    owner, repo = parts[0], parts[1]
    if not re.match(r"^[\w.\-]+$", owner) or not re.match(r"^[\w.\-]+$", repo):
        raise InvalidRepoUrlError("Invalid owner or repo name")

    return owner, repo


def _make_headers(token: str | None) -> dict[str, str]:
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _is_rate_limited(resp: httpx.Response) -> bool:
    if resp.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in resp.text.lower()


def _handle_error(resp: httpx.Response, context: str) -> None:
    if resp.status_code == 404:
        raise NotFoundError(f"{context}: not found (or private)")
    if resp.status_code in (403, 429):
        if _is_rate_limited(resp):
            raise RateLimitedError()
        raise GitHubError("Repository is private or access denied", status_code=403)
    if resp.status_code >= 500:
        raise TransientNetworkError(f"GitHub is unavailable ({resp.status_code})")
    if resp.status_code >= 400:
        raise GitHubError(f"GitHub API error ({resp.status_code}): {resp.text[:200]}", status_code=502)


class GitHubSource:
    """Reads repository metadata, listings and raw file contents from GitHub."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_base: str = "https://api.github.com",
    ):
        self.client = client
        self.token = token
        self.api_base = api_base.rstrip("/")

    async def _get(self, url: str, headers: dict[str, str], **kwargs) -> httpx.Response:
        try:
            return await self.client.get(url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise TransientNetworkError(f"Failed to connect to GitHub: {exc}") from exc

    async def fetch_metadata(self, owner: str, repo: str) -> RepositoryMetadata:
        resp = await self._get(f"{self.api_base}/repos/{owner}/{repo}", _make_headers(self.token))
        _handle_error(resp, "Repository")
        data = resp.json()
        return RepositoryMetadata(
            name=data.get("name") or repo,
            description=data.get("description"),
            language=data.get("language"),
            topics=data.get("topics") or [],
            stars=data.get("stargazers_count") or 0,
            forks=data.get("forks_count") or 0,
        )

    async def list_files(self, owner: str, repo: str, path: str = "") -> list[FileEntry]:
        url = f"{self.api_base}/repos/{owner}/{repo}/contents"
        if path:
            url = f"{url}/{path}"
        resp = await self._get(url, _make_headers(self.token))
        _handle_error(resp, f"Path '{path or '/'}'")
        items = resp.json()
        if not isinstance(items, list):
            raise GitHubError(f"Expected a directory listing for '{path or '/'}'", status_code=502)

        files: list[FileEntry] = []
        directories: list[str] = []
        for item in items:
            if item.get("type") == "file":
                files.append(
                    FileEntry(
                        path=item["path"],
                        name=item["name"],
                        size=item.get("size") or 0,
                        download_url=item.get("download_url"),
                        category=classify(item["name"], item["path"]),
                    )
                )
            elif item.get("type") == "dir":
                directories.append(item["path"])

        for directory in directories:
            files.extend(await self.list_files(owner, repo, directory))

        return files

    async def fetch_content(self, download_url: str) -> str:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        resp = await self._get(download_url, headers)
        _handle_error(resp, f"File '{download_url}'")
        return resp.text
