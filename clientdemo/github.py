from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from dateutil import parser

from gqlclient import GqlClient, QueryResponse

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

# Basic repository facts plus the five latest commits on one branch
GET_REPO_DATA_QUERY = """
query FetchRepoInfo($owner: String!, $name: String!, $branch: String!) {
  repository(owner: $owner, name: $name) {
    name
    owner {
      login
    }
    description
    createdAt
    primaryLanguage {
      name
    }
    diskUsage
    isPrivate
    ref(qualifiedName: $branch) {
      target {
        ... on Commit {
          history(first: 5) {
            edges {
              node {
                committedDate
                messageHeadline
              }
            }
          }
        }
      }
    }
  }
}
"""


class RepoQueryError(Exception):
    """The GraphQL service answered but reported errors for the lookup."""

    def __init__(self, messages):
        self.messages = list(messages)
        lines = ["Errors found in GraphQL Response:", ""]
        lines.extend(self.messages)
        super().__init__("\n".join(lines) + "\n")


@dataclass
class RepoCommit:
    committed_at: Optional[datetime]
    headline: str


@dataclass
class RepoData:
    """Information about a single GitHub repository."""
    name: str
    owner: str
    description: Optional[str]
    created_at: Optional[datetime]
    primary_language: Optional[str]
    disk_usage: Optional[int]
    is_private: bool
    recent_commits: List[RepoCommit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        """
        Build a RepoData from the `data` object of a FetchRepoInfo response.

        Raises:
            ValueError: If the repository was not found.
        """
        repository = data["repository"]
        if repository is None:
            raise ValueError("response contains no repository")

        language = repository.get("primaryLanguage") or {}
        return cls(
            name=repository["name"],
            owner=repository["owner"]["login"],
            description=repository.get("description"),
            created_at=_parse_time(repository.get("createdAt")),
            primary_language=language.get("name"),
            disk_usage=repository.get("diskUsage"),
            is_private=bool(repository.get("isPrivate")),
            recent_commits=_commits(repository.get("ref")),
        )


def _parse_time(value):
    return parser.isoparse(value) if value else None


def _commits(ref):
    # ref is null when the branch does not exist
    if not ref:
        return []
    history = (ref.get("target") or {}).get("history") or {}

    commits = []
    for edge in history.get("edges", []):
        node = edge["node"]
        commits.append(RepoCommit(
            committed_at=_parse_time(node.get("committedDate")),
            headline=node.get("messageHeadline", ""),
        ))
    return commits


def get_repo_data(client: GqlClient, owner: str, name: str, branch: str = "master") -> RepoData:
    """
    Fetch information about a GitHub repository.

    Args:
        client (GqlClient): A client pointed at a GitHub GraphQL endpoint.
        owner (str): The user or organization that owns the repository.
        name (str): The repository name.
        branch (str): Branch whose recent commits are listed.

    Returns:
        RepoData: The repository details.

    Raises:
        RepoQueryError: If the GraphQL service reported errors.
        GqlClientError: If the call itself failed.
    """
    response = QueryResponse(decoder=RepoData.from_dict)
    variables = {"owner": owner, "name": name, "branch": branch}
    client.query(GET_REPO_DATA_QUERY, variables, response)

    if response.has_errors:
        raise RepoQueryError(response.messages)
    if response.data is None:
        raise RepoQueryError(["Response did not contain the expected structure"])
    return response.data
