
"""
Configure branch protection rules for the repository using the GitHub API.

Usage:
    python scripts/setup_branch_protection.py

Environment variables required:
    GITHUB_TOKEN      - GitHub Personal Access Token with repo scope
    GITHUB_REPOSITORY - Format: owner/repo (e.g. "username/ai-learning")
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from github_api import GitHubApiError, GitHubClient
from protection_policy import DEVELOP_POLICY, MAIN_POLICY, ProtectionPolicy

USER_AGENT = "AI-Learning-Setup-Script"

TOKEN_HELP = (
    "To create a token:",
    "1. Go to GitHub → Settings → Developer settings → Personal access tokens",
    "2. Click \"Generate new token (classic)\"",
    "3. Select \"repo\" scope",
    "4. Copy the token and set it as GITHUB_TOKEN"
)

REPOSITORY_HELP = (
    "Format: owner/repo (e.g., \"username/ai-learning\")",
)


class ConfigurationError(Exception):

    def __init__(self, message: str, guidance: Sequence[str] = ()):
        super().__init__(message)
        self.guidance = tuple(guidance)


@dataclass(frozen=True)
class RemoteCredentials:
    owner: str
    repo: str
    token: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class BranchTarget:
    name: str
    policy: ProtectionPolicy
    skip_hint: Tuple[str, ...] = ()


DEFAULT_TARGETS = (
    BranchTarget("main", MAIN_POLICY),
    BranchTarget("develop", DEVELOP_POLICY, skip_hint=(
        "💡 To create develop branch:",
        "   git checkout -b develop",
        "   git push -u origin develop"
    ))
)


def load_credentials(environ) -> RemoteCredentials:
    token = environ.get("GITHUB_TOKEN")
    repository = environ.get("GITHUB_REPOSITORY")

    if not token:
        raise ConfigurationError("GITHUB_TOKEN environment variable is required", TOKEN_HELP)
    if not repository:
        raise ConfigurationError("GITHUB_REPOSITORY environment variable is required", REPOSITORY_HELP)

    owner, _, repo = repository.strip().partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigurationError(f"GITHUB_REPOSITORY must look like owner/repo, got '{repository}'", REPOSITORY_HELP)

    return RemoteCredentials(owner=owner, repo=repo, token=token)


def check_branch_exists(client, credentials: RemoteCredentials, branch_name: str) -> bool:
    # any failure (404, bad token, network) is treated as "not there"
    try:
        client.request("GET", f"/repos/{credentials.owner}/{credentials.repo}/branches/{branch_name}")
    except GitHubApiError:
        return False
    return True


def setup_branch_protection(client, credentials: RemoteCredentials, branch_name: str, policy: ProtectionPolicy) -> bool:
    print(f"\n📋 Setting up protection for branch: {branch_name}")
    path = f"/repos/{credentials.owner}/{credentials.repo}/branches/{branch_name}/protection"
    try:
        client.request("PUT", path, policy.to_payload())
    except GitHubApiError as e:
        print(f"❌ Failed to configure {branch_name}: {e}")
        return False

    print(f"✅ Branch protection configured for {branch_name}")
    return True


def apply_targets(client, credentials: RemoteCredentials, targets: Sequence[BranchTarget]) -> Dict[str, Optional[bool]]:
    results = {}
    for target in targets:
        if not check_branch_exists(client, credentials, target.name):
            print(f"\n⚠️  Branch '{target.name}' does not exist yet. Skipping {target.name} branch protection.")
            for line in target.skip_hint:
                print(line)
            results[target.name] = None
            continue
        results[target.name] = setup_branch_protection(client, credentials, target.name, target.policy)
    return results


def print_next_steps(credentials: RemoteCredentials):
    print("\n✨ Branch protection setup complete!")
    print("\n📚 Next steps:")
    print("1. Verify protection rules at:")
    print(f"   https://github.com/{credentials.owner}/{credentials.repo}/settings/branches")
    print("2. Configure GitHub Secrets for deployments")
    print("3. Review the CI/CD guide: Documentation/CICD-GUIDE.md")


def main(environ=None, client=None) -> int:
    if environ is None:
        environ = os.environ

    try:
        credentials = load_credentials(environ)
    except ConfigurationError as e:
        print(f"❌ {e}")
        if e.guidance:
            print()
            for line in e.guidance:
                print(line)
        return 1

    try:
        if client is None:
            client = GitHubClient(credentials.token, user_agent=USER_AGENT)

        print("🚀 Setting up branch protection rules...")
        print(f"Repository: {credentials.full_name}\n")

        apply_targets(client, credentials, DEFAULT_TARGETS)
        print_next_steps(credentials)
    except Exception as e:
        print(f"\n❌ Setup failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
