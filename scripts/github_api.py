
from dataclasses import dataclass
from typing import Any, Optional

import requests

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
DEFAULT_USER_AGENT = "Repo-Setup-Script"


class GitHubApiError(Exception):
    """Non-2xx response or transport failure talking to the GitHub API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    data: Any = None


class GitHubClient:

    def __init__(self, token: str, base_url: str = GITHUB_API_URL, user_agent: str = DEFAULT_USER_AGENT):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": GITHUB_API_VERSION
        }

    def request(self, method: str, path: str, body: Optional[dict] = None) -> ApiResponse:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, headers=self.headers(), json=body)
        except requests.exceptions.RequestException as e:
            raise GitHubApiError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise GitHubApiError(f"HTTP {response.status_code}: {response.text}", response.status_code)

        # a 2xx body that isn't JSON is left to blow up in the caller
        data = response.json() if response.text else None
        return ApiResponse(response.status_code, data)
