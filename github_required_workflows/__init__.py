"""Typed client for GitHub Actions required workflows.

Every operation returns a ``Result`` of (value, response, error) so response
metadata survives failures.
"""

from .cli import main
from .errors import (
    AbuseRateLimitError,
    ApiError,
    DecodeError,
    ErrorResponse,
    GitHubError,
    InvalidParameterError,
    RateLimitError,
)
from .models import (
    CreateUpdateRequiredWorkflowOptions,
    ListOptions,
    OrgRequiredWorkflow,
    OrgRequiredWorkflows,
    RepoRequiredWorkflow,
    RepoRequiredWorkflows,
    Repository,
    RequiredWorkflowSelectedRepos,
    SelectedRepoIDs,
)
from .response import ApiResponse, Rate, Result
from .rest import GitHubClient, get_client

__all__ = [
    "main",
    "get_client",
    "GitHubClient",
    "ApiResponse",
    "Rate",
    "Result",
    "Repository",
    "OrgRequiredWorkflow",
    "OrgRequiredWorkflows",
    "RepoRequiredWorkflow",
    "RepoRequiredWorkflows",
    "RequiredWorkflowSelectedRepos",
    "ListOptions",
    "CreateUpdateRequiredWorkflowOptions",
    "SelectedRepoIDs",
    "GitHubError",
    "InvalidParameterError",
    "DecodeError",
    "ApiError",
    "ErrorResponse",
    "RateLimitError",
    "AbuseRateLimitError",
]

if __name__ == "__main__":
    main()
