"""
GitHub API client for scratch repository build operations.
"""

from typing import Any
from urllib.parse import quote

import httpx

from packager.core.exceptions import GitHubAPIError
from packager.core.logging import get_logger
from .schemas import Release, TreeEntry, WorkflowRun

logger = get_logger(__name__)

# Dispatch is asynchronous on GitHub's side; any of these means "accepted"
DISPATCH_ACCEPTED = (201, 202, 204)


class GitHubClient:
    """Client for the GitHub REST endpoints used by the build pipeline."""

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str, base_url: str | None = None, timeout: float | None = None):
        self._token = token
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        follow_redirects: bool = False,
    ) -> httpx.Response:
        """
        Send a request and return the response.

        Raises:
            GitHubAPIError: On a non-2xx status or a transport failure
        """
        url = f"{self._base_url}{path}"
        request_headers = {**self._headers, **(headers or {})}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=follow_redirects) as client:
                response = await client.request(
                    method,
                    url,
                    headers=request_headers,
                    json=json,
                    params=params,
                )
        except httpx.RequestError as exc:
            logger.debug("GitHub request %s %s failed: %s", method, path, exc)
            raise GitHubAPIError(f"{method} {path} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise GitHubAPIError(
                f"GitHub API error {response.status_code} {method} {path}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    # Repositories

    async def generate_from_template(
        self,
        template_owner: str,
        template_repo: str,
        *,
        name: str,
        owner: str,
        private: bool = False,
    ) -> dict[str, Any]:
        """Create a repository from a template repository."""
        response = await self._request(
            "POST",
            f"/repos/{template_owner}/{template_repo}/generate",
            json={"name": name, "owner": owner, "private": private},
        )
        return response.json()

    async def create_repository(
        self,
        *,
        name: str,
        private: bool = False,
        auto_init: bool = True,
        description: str = "",
    ) -> dict[str, Any]:
        """Create a repository under the authenticated user."""
        response = await self._request(
            "POST",
            "/user/repos",
            json={
                "name": name,
                "private": private,
                "auto_init": auto_init,
                "description": description,
            },
        )
        return response.json()

    async def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        response = await self._request("GET", f"/repos/{owner}/{repo}")
        return response.json()

    async def delete_repository(self, owner: str, repo: str) -> None:
        await self._request("DELETE", f"/repos/{owner}/{repo}")

    # Git data

    async def get_tree(self, owner: str, repo: str, ref: str, recursive: bool = True) -> list[TreeEntry]:
        """List the tree at ref, descending into subtrees when recursive."""
        params = {"recursive": "1"} if recursive else None
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/git/trees/{quote(ref, safe='')}",
            params=params,
        )
        tree = response.json().get("tree") or []
        return [
            TreeEntry(path=item["path"], type=item["type"], sha=item["sha"])
            for item in tree
        ]

    async def get_blob(self, owner: str, repo: str, sha: str) -> str:
        """Return blob content as base64 without embedded newlines."""
        response = await self._request("GET", f"/repos/{owner}/{repo}/git/blobs/{sha}")
        content = response.json().get("content") or ""
        return content.replace("\n", "")

    # Contents

    async def put_file_contents(
        self,
        owner: str,
        repo: str,
        path: str,
        content_b64: str,
        message: str,
    ) -> dict[str, Any]:
        """
        Create a file in the repository with a single commit.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path inside the repository
            content_b64: Base64 encoded file content
            message: Commit message

        Returns:
            Contents API response payload
        """
        response = await self._request(
            "PUT",
            f"/repos/{owner}/{repo}/contents/{quote(path)}",
            json={"message": message, "content": content_b64},
        )
        return response.json()

    # Actions

    async def dispatch_workflow(self, owner: str, repo: str, workflow_id: str, ref: str) -> int:
        """
        Trigger a workflow_dispatch event.

        Returns:
            Response status code

        Raises:
            GitHubAPIError: If the dispatch was not accepted
        """
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/actions/workflows/{quote(workflow_id, safe='')}/dispatches",
            json={"ref": ref},
        )
        if response.status_code not in DISPATCH_ACCEPTED:
            raise GitHubAPIError(
                f"Unexpected dispatch status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.status_code

    async def list_workflow_runs(self, owner: str, repo: str, per_page: int = 1) -> list[WorkflowRun]:
        """List the most recent workflow runs, newest first."""
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/actions/runs",
            params={"per_page": per_page},
        )
        runs = response.json().get("workflow_runs") or []
        return [WorkflowRun.from_api(item) for item in runs]

    async def get_workflow_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        response = await self._request("GET", f"/repos/{owner}/{repo}/actions/runs/{run_id}")
        return WorkflowRun.from_api(response.json())

    # Releases

    async def get_latest_release(self, owner: str, repo: str) -> Release:
        response = await self._request("GET", f"/repos/{owner}/{repo}/releases/latest")
        return Release.from_api(response.json())

    async def download_release_asset(self, owner: str, repo: str, asset_id: int) -> bytes:
        """Download asset bytes with this client's credentials."""
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/releases/assets/{asset_id}",
            headers={"Accept": "application/octet-stream"},
            follow_redirects=True,
        )
        return response.content
