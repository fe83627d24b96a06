"""GitHub Actions required workflow endpoints.

API docs: https://docs.github.com/en/rest/actions/required-workflows
"""

from .models import (
    CreateUpdateRequiredWorkflowOptions,
    ListOptions,
    OrgRequiredWorkflow,
    OrgRequiredWorkflows,
    RepoRequiredWorkflow,
    RepoRequiredWorkflows,
    RequiredWorkflowSelectedRepos,
    SelectedRepoIDs,
)
from .paths import ResourcePath
from .response import Result

ORG_REQUIRED_WORKFLOWS = ResourcePath("/orgs/{org}/actions/required_workflows")
ORG_REQUIRED_WORKFLOW = ResourcePath("/orgs/{org}/actions/required_workflows/{workflow_id}")
SELECTED_REPOS = ResourcePath("/orgs/{org}/actions/required_workflows/{workflow_id}/repositories")
SELECTED_REPO = ResourcePath(
    "/orgs/{org}/actions/required_workflows/{workflow_id}/repositories/{repo_id}"
)
REPO_REQUIRED_WORKFLOWS = ResourcePath("/repos/{owner}/{repo}/actions/required_workflows")
REPO_REQUIRED_WORKFLOW = ResourcePath(
    "/repos/{owner}/{repo}/actions/required_workflows/{workflow_id}"
)

# GitHub rejects creation without these
CREATE_REQUIRED_FIELDS = ("workflow_file_path", "repository_id")


class ActionsService:
    """Required workflow operations, reached through ``GitHubClient.actions``."""

    def __init__(self, client):
        self._client = client

    def list_org_required_workflows(self, org: str, opts: ListOptions | None = None) -> Result:
        """List the required workflows of an organization (one page)."""
        return self._client.call(
            "GET", ORG_REQUIRED_WORKFLOWS, {"org": org},
            opts=opts, decode=OrgRequiredWorkflows.from_dict,
        )

    def create_required_workflow(self, org: str, opts: CreateUpdateRequiredWorkflowOptions) -> Result:
        """Create a required workflow in an organization.

        The value is the created workflow when GitHub returns it, else None.
        """
        return self._client.call(
            "PUT", ORG_REQUIRED_WORKFLOWS, {"org": org},
            body=opts, required=CREATE_REQUIRED_FIELDS, decode=OrgRequiredWorkflow.from_dict,
        )

    def get_required_workflow_by_id(self, org: str, workflow_id: int) -> Result:
        return self._client.call(
            "GET", ORG_REQUIRED_WORKFLOW, {"org": org, "workflow_id": workflow_id},
            decode=OrgRequiredWorkflow.from_dict,
        )

    def update_required_workflow(
        self, org: str, workflow_id: int, opts: CreateUpdateRequiredWorkflowOptions
    ) -> Result:
        """Update a required workflow; only the fields set on ``opts`` are sent."""
        return self._client.call(
            "PATCH", ORG_REQUIRED_WORKFLOW, {"org": org, "workflow_id": workflow_id},
            body=opts, decode=OrgRequiredWorkflow.from_dict,
        )

    def delete_required_workflow(self, org: str, workflow_id: int) -> Result:
        return self._client.call(
            "DELETE", ORG_REQUIRED_WORKFLOW, {"org": org, "workflow_id": workflow_id}
        )

    def list_required_workflow_selected_repos(
        self, org: str, workflow_id: int, opts: ListOptions | None = None
    ) -> Result:
        """List the repositories selected for a required workflow (one page)."""
        return self._client.call(
            "GET", SELECTED_REPOS, {"org": org, "workflow_id": workflow_id},
            opts=opts, decode=RequiredWorkflowSelectedRepos.from_dict,
        )

    def set_required_workflow_selected_repos(
        self, org: str, workflow_id: int, ids: list[int]
    ) -> Result:
        """Replace the selected repositories of a required workflow."""
        return self._client.call(
            "PUT", SELECTED_REPOS, {"org": org, "workflow_id": workflow_id},
            body=None if ids is None else SelectedRepoIDs(ids),
            required=("selected_repository_ids",),
        )

    def add_repo_to_required_workflow(self, org: str, workflow_id: int, repo_id: int) -> Result:
        return self._client.call(
            "PUT", SELECTED_REPO, {"org": org, "workflow_id": workflow_id, "repo_id": repo_id}
        )

    def remove_repo_from_required_workflow(self, org: str, workflow_id: int, repo_id: int) -> Result:
        return self._client.call(
            "DELETE", SELECTED_REPO, {"org": org, "workflow_id": workflow_id, "repo_id": repo_id}
        )

    def list_repo_required_workflows(
        self, owner: str, repo: str, opts: ListOptions | None = None
    ) -> Result:
        """List the required workflows that run on a repository (one page)."""
        return self._client.call(
            "GET", REPO_REQUIRED_WORKFLOWS, {"owner": owner, "repo": repo},
            opts=opts, decode=RepoRequiredWorkflows.from_dict,
        )

    def get_repo_required_workflow(self, owner: str, repo: str, workflow_id: int) -> Result:
        return self._client.call(
            "GET", REPO_REQUIRED_WORKFLOW, {"owner": owner, "repo": repo, "workflow_id": workflow_id},
            decode=RepoRequiredWorkflow.from_dict,
        )
