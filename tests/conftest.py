"""
Pytest configuration and shared fixtures.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token")
    monkeypatch.setenv("GITHUB_USER", "octocat")
    monkeypatch.setenv("PROGRESS_CHANNEL_ID", "-100123456789:42")
    monkeypatch.delenv("AUTO_DELETE", raising=False)
    monkeypatch.delenv("ASSET_DELIVERY", raising=False)


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_bot():
    """Create a mock Telegram Bot."""
    bot = MagicMock()
    bot.send_message = AsyncMock()
    return bot


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx AsyncClient."""
    with patch("httpx.AsyncClient") as mock:
        client_instance = AsyncMock()
        mock.return_value.__aenter__.return_value = client_instance
        yield client_instance


@pytest.fixture
def no_sleep():
    """Awaitable sleep replacement recording requested delays."""
    return AsyncMock(return_value=None)


# ============================================================================
# Fake GitHub
# ============================================================================

class FakeGitHubClient:
    """In-memory stand-in for GitHubClient with scriptable failures."""

    def __init__(self):
        from packager.services.github.schemas import Release, ReleaseAsset

        self.calls: list[tuple] = []
        self.repos: dict[str, dict[str, str]] = {}

        self.generate_error = None
        self.create_error = None
        self.repository_error = None
        self.template_branch = "main"
        self.tree = []
        self.tree_error = None
        self.blobs: dict[str, str] = {}
        self.blob_errors: set[str] = set()
        self.put_errors: set[str] = set()
        self.upload_error = None
        self.dispatch_error = None

        # One item per poll: WorkflowRun, None (no run yet) or an exception
        self.run_sequence: list = []
        self._current_run = None
        self.run_detail_errors: set[int] = set()
        self.list_calls = 0

        self.release = Release(
            tag_name="v1",
            html_url="https://github.com/octocat/repo/releases/tag/v1",
            assets=[ReleaseAsset(id=7, name="app.zip", browser_download_url="https://dl/app.zip", size=3)],
        )
        self.release_error = None
        self.asset_bytes = b"zip"
        self.download_error = None
        self.delete_error = None

    def _error(self, status: int = 500, body: str = "boom"):
        from packager.core.exceptions import GitHubAPIError
        return GitHubAPIError(f"error {status}", status_code=status, body=body)

    async def generate_from_template(self, template_owner, template_repo, *, name, owner, private=False):
        self.calls.append(("generate", template_owner, template_repo, name))
        if self.generate_error:
            raise self.generate_error
        self.repos[f"{owner}/{name}"] = {}
        return {"html_url": f"https://github.com/{owner}/{name}", "default_branch": "main"}

    async def create_repository(self, *, name, private=False, auto_init=True, description=""):
        self.calls.append(("create", name, auto_init))
        if self.create_error:
            raise self.create_error
        self.repos[f"octocat/{name}"] = {}
        return {"html_url": f"https://github.com/octocat/{name}", "default_branch": "main"}

    async def get_repository(self, owner, repo):
        self.calls.append(("get_repository", owner, repo))
        if self.repository_error:
            raise self.repository_error
        return {"default_branch": self.template_branch}

    async def delete_repository(self, owner, repo):
        self.calls.append(("delete", owner, repo))
        if self.delete_error:
            raise self.delete_error
        self.repos.pop(f"{owner}/{repo}", None)

    async def get_tree(self, owner, repo, ref, recursive=True):
        self.calls.append(("get_tree", owner, repo, ref))
        if self.tree_error:
            raise self.tree_error
        return list(self.tree)

    async def get_blob(self, owner, repo, sha):
        self.calls.append(("get_blob", sha))
        if sha in self.blob_errors:
            raise self._error(404, "blob missing")
        return self.blobs[sha]

    async def put_file_contents(self, owner, repo, path, content_b64, message):
        self.calls.append(("put", owner, repo, path))
        if path in self.put_errors:
            raise self._error(422, "invalid path")
        if self.upload_error:
            raise self.upload_error
        self.repos.setdefault(f"{owner}/{repo}", {})[path] = content_b64
        return {"content": {"path": path}, "commit": {"sha": "c0ffee"}}

    async def dispatch_workflow(self, owner, repo, workflow_id, ref):
        self.calls.append(("dispatch", owner, repo, workflow_id, ref))
        if self.dispatch_error:
            raise self.dispatch_error
        return 204

    async def list_workflow_runs(self, owner, repo, per_page=1):
        self.list_calls += 1
        self.calls.append(("list_runs", owner, repo))
        if not self.run_sequence:
            return []
        item = self.run_sequence.pop(0)
        if isinstance(item, Exception):
            raise item
        if item is None:
            return []
        self._current_run = item
        return [item]

    async def get_workflow_run(self, owner, repo, run_id):
        self.calls.append(("get_run", run_id))
        if run_id in self.run_detail_errors:
            self.run_detail_errors.discard(run_id)
            raise self._error(502, "bad gateway")
        return self._current_run

    async def get_latest_release(self, owner, repo):
        self.calls.append(("latest_release", owner, repo))
        if self.release_error:
            raise self.release_error
        return self.release

    async def download_release_asset(self, owner, repo, asset_id):
        self.calls.append(("download", asset_id))
        if self.download_error:
            raise self.download_error
        return self.asset_bytes

    def called(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_github():
    """Create a FakeGitHubClient."""
    return FakeGitHubClient()


@pytest.fixture
def scratch_repo():
    from packager.services.github.schemas import ScratchRepository
    return ScratchRepository(owner="octocat", name="packager-temp-abc", html_url="https://github.com/octocat/packager-temp-abc")


@pytest.fixture
def build_request():
    """Create a BuildRequest with fast polling."""
    from packager.models.build import BuildRequest
    return BuildRequest(
        artifact=b"\x00\x01binary",
        artifact_name="app.bin",
        owner_login="octocat",
        auth_token="ghp_test",
        poll_interval_ms=10,
        poll_max_attempts=5,
        first_poll_delay_ms=1,
    )


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def github_client():
    """Create a GitHubClient with test config."""
    from packager.services.github.client import GitHubClient
    return GitHubClient("ghp_test")


def _make_run(run_id: int = 1, status: str = "in_progress", conclusion: str | None = None):
    from packager.services.github.schemas import WorkflowRun
    return WorkflowRun(id=run_id, status=status, conclusion=conclusion)


@pytest.fixture
def make_run():
    return _make_run
