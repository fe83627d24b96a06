"""Data models and constants for GitHub Actions required workflows.

Every field is None when the corresponding key is absent from the JSON, so
an unset field is never confused with a zero value.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .encoding import parse_timestamp, positive_int
from .errors import InvalidParameterError
from .paths import validate_id

SCOPE_ALL = "all"
SCOPE_SELECTED = "selected"
VALID_SCOPES = (SCOPE_ALL, SCOPE_SELECTED)


def _require_mapping(cls, data):
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")


def _optional(cls, data):
    return None if data is None else cls.from_dict(data)


@dataclass
class Repository:
    """Minimal repository reference embedded in required workflow payloads."""

    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    url: str | None = None
    html_url: str | None = None
    private: bool | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Repository":
        _require_mapping(cls, data)
        return cls(
            id=data.get("id"),
            node_id=data.get("node_id"),
            name=data.get("name"),
            full_name=data.get("full_name"),
            url=data.get("url"),
            html_url=data.get("html_url"),
            private=data.get("private"),
            description=data.get("description"),
        )


@dataclass
class OrgRequiredWorkflow:
    """A required workflow as configured on an organization."""

    id: int | None = None
    name: str | None = None
    path: str | None = None
    scope: str | None = None
    ref: str | None = None
    state: str | None = None
    selected_repositories_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    repository: Repository | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "OrgRequiredWorkflow":
        _require_mapping(cls, data)
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            path=data.get("path"),
            scope=data.get("scope"),
            ref=data.get("ref"),
            state=data.get("state"),
            selected_repositories_url=data.get("selected_repositories_url"),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            repository=_optional(Repository, data.get("repository")),
        )


@dataclass
class OrgRequiredWorkflows:
    """One page of an organization's required workflows."""

    total_count: int | None = None
    required_workflows: list[OrgRequiredWorkflow] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "OrgRequiredWorkflows":
        _require_mapping(cls, data)
        return cls(
            total_count=data.get("total_count"),
            required_workflows=[
                OrgRequiredWorkflow.from_dict(w) for w in data.get("required_workflows") or []
            ],
        )


@dataclass
class RepoRequiredWorkflow:
    """A required workflow as seen from a repository it applies to.

    ``source_repository`` is the repository the workflow file lives in.
    """

    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    path: str | None = None
    state: str | None = None
    url: str | None = None
    html_url: str | None = None
    badge_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    source_repository: Repository | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "RepoRequiredWorkflow":
        _require_mapping(cls, data)
        return cls(
            id=data.get("id"),
            node_id=data.get("node_id"),
            name=data.get("name"),
            path=data.get("path"),
            state=data.get("state"),
            url=data.get("url"),
            html_url=data.get("html_url"),
            badge_url=data.get("badge_url"),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            source_repository=_optional(Repository, data.get("source_repository")),
        )


@dataclass
class RepoRequiredWorkflows:
    """One page of the required workflows that apply to a repository."""

    total_count: int | None = None
    required_workflows: list[RepoRequiredWorkflow] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "RepoRequiredWorkflows":
        _require_mapping(cls, data)
        return cls(
            total_count=data.get("total_count"),
            required_workflows=[
                RepoRequiredWorkflow.from_dict(w) for w in data.get("required_workflows") or []
            ],
        )


@dataclass
class RequiredWorkflowSelectedRepos:
    """One page of the repositories selected for a required workflow."""

    total_count: int | None = None
    repositories: list[Repository] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "RequiredWorkflowSelectedRepos":
        _require_mapping(cls, data)
        return cls(
            total_count=data.get("total_count"),
            repositories=[Repository.from_dict(r) for r in data.get("repositories") or []],
        )


class SelectedRepoIDs(list):
    """Repository ids selected for a required workflow.

    Kept exactly as given: order and duplicates are not normalized.
    """

    def to_payload(self) -> dict:
        return {
            "selected_repository_ids": [
                validate_id("selected_repository_ids", repo_id) for repo_id in self
            ]
        }


@dataclass
class ListOptions:
    """Pagination options; unset fields are left out of the query string."""

    page: int | None = None
    per_page: int | None = None

    def to_params(self) -> dict:
        params = {}
        if self.per_page is not None:
            params["per_page"] = positive_int("per_page", self.per_page)
        if self.page is not None:
            params["page"] = positive_int("page", self.page)
        return params


@dataclass
class CreateUpdateRequiredWorkflowOptions:
    """Body for creating or updating an organization required workflow."""

    workflow_file_path: str | None = None
    repository_id: int | None = None
    scope: str | None = None
    selected_repository_ids: list[int] | None = None

    def to_payload(self) -> dict:
        payload = {}
        if self.workflow_file_path is not None:
            if not isinstance(self.workflow_file_path, str) or not self.workflow_file_path:
                raise InvalidParameterError("workflow_file_path must be a non-empty string")
            payload["workflow_file_path"] = self.workflow_file_path
        if self.repository_id is not None:
            payload["repository_id"] = validate_id("repository_id", self.repository_id)
        if self.scope is not None:
            if self.scope not in VALID_SCOPES:
                raise InvalidParameterError(
                    f"scope must be one of {', '.join(VALID_SCOPES)}, got {self.scope!r}"
                )
            payload["scope"] = self.scope
        if self.selected_repository_ids is not None:
            payload.update(SelectedRepoIDs(self.selected_repository_ids).to_payload())
        return payload
