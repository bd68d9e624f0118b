"""
TagShip — GitHub API authentication helpers.

GitHub and GitHub Enterprise both take a personal access / OAuth token in
the Authorization header on every request.
"""

from dataclasses import dataclass

USER_AGENT = "tagship"


@dataclass(frozen=True)
class GitHubCredentials:
    token: str

    def as_headers(self) -> dict[str, str]:
        """Return the auth headers required by the GitHub REST API."""
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }

    def __repr__(self) -> str:
        return "GitHubCredentials(token=***)"
