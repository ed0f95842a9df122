"""GitHub API integration service"""

from typing import Optional, List, TYPE_CHECKING, Union
from urllib.parse import urlparse

from github import Auth, Github, GithubException

from git_wtm.exceptions import GitHubAPIError
from git_wtm.models.results import PullRequestSummary
from git_wtm.logging_config import get_logger

if TYPE_CHECKING:
    from github.Repository import Repository
    from git_wtm.config import Config

logger = get_logger(__name__)


def github_repo_from_url(remote_url: str) -> Optional[str]:
    """Extract `owner/repo` from a GitHub SSH or HTTPS remote URL."""
    if "github.com" not in remote_url:
        return None

    if remote_url.startswith("git@"):
        # Handle SSH URL format (git@github.com:org/repo.git)
        path = remote_url.split("github.com:", 1)[1]
    else:
        # Handle HTTPS URL format (https://github.com/org/repo.git)
        parsed_url = urlparse(remote_url)
        path = parsed_url.path

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]
    return path or None


class GitHubService:
    """Lists open pull requests of the repository's GitHub remote."""

    def __init__(self, config: Union["Config", dict]):
        self.config = config
        self.github_token = config.get("github_token")
        self.max_prs = config.get("max_prs_to_fetch", 100)
        self.github_repo: Optional[str] = None
        self.github: Optional[Github] = None
        self.gh_repo: Optional["Repository"] = None

    def setup_github_api(self, remote_url: Optional[str]) -> None:
        """Setup GitHub API access for the given remote.

        Works anonymously (rate limited, public repositories only) when no
        token is configured.

        Raises:
            GitHubAPIError: remote is not on GitHub or the repository is not accessible
        """
        if not remote_url:
            raise GitHubAPIError("setup", "No remote configured for this repository")

        path = github_repo_from_url(remote_url)
        if not path:
            raise GitHubAPIError("setup", f"Not a GitHub repository: {remote_url}")
        self.github_repo = path

        if self.github_token:
            self.github = Github(auth=Auth.Token(self.github_token))
        else:
            logger.debug("[GitHub] No GitHub token found, using anonymous access")
            self.github = Github()

        try:
            self.gh_repo = self.github.get_repo(self.github_repo)
        except GithubException as e:
            raise GitHubAPIError("get_repo", f"{self.github_repo}: {e}")

        logger.debug(f"[GitHub] GitHub integration enabled for: {path}")

    def list_open_pull_requests(self) -> List[PullRequestSummary]:
        """Open pull requests (number and title), newest first."""
        if self.gh_repo is None:
            raise GitHubAPIError("get_pulls", "GitHub API is not set up")

        summaries = []
        try:
            for pr in self.gh_repo.get_pulls(state="open", sort="created", direction="desc"):
                summaries.append(PullRequestSummary(number=pr.number, title=pr.title))
                if len(summaries) >= self.max_prs:
                    logger.debug(f"[GitHub] Reached PR limit ({self.max_prs})")
                    break
        except GithubException as e:
            raise GitHubAPIError("get_pulls", str(e))

        logger.debug(f"[GitHub] Found {len(summaries)} open PRs")
        return summaries
