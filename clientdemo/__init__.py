"""Demonstrates gqlclient against the GitHub GraphQL API."""

from clientdemo.github import (
    GET_REPO_DATA_QUERY,
    GITHUB_GRAPHQL_URL,
    RepoCommit,
    RepoData,
    RepoQueryError,
    get_repo_data,
)
from clientdemo.renderer import Renderer

__all__ = [
    "GET_REPO_DATA_QUERY",
    "GITHUB_GRAPHQL_URL",
    "Renderer",
    "RepoCommit",
    "RepoData",
    "RepoQueryError",
    "get_repo_data",
]
