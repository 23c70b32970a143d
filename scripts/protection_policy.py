
from dataclasses import dataclass, field, fields, replace
from typing import Tuple

DEFAULT_STATUS_CHECKS = (
    "Test Backend",
    "Test Frontend",
    "Build Docker Images",
    "All Tests Passed"
)


@dataclass(frozen=True)
class ReviewRequirements:
    required_approving_review_count: int = 1
    dismiss_stale_reviews: bool = True
    require_code_owner_reviews: bool = True
    require_last_push_approval: bool = False

    def __post_init__(self):
        if self.required_approving_review_count < 0:
            raise ValueError(f"required_approving_review_count must be >= 0, got {self.required_approving_review_count}")


@dataclass(frozen=True)
class ProtectionPolicy:
    status_checks: Tuple[str, ...] = DEFAULT_STATUS_CHECKS
    strict_status_checks: bool = True
    reviews: ReviewRequirements = field(default_factory=ReviewRequirements)
    enforce_admins: bool = False
    required_linear_history: bool = True
    allow_force_pushes: bool = False
    allow_deletions: bool = False
    block_creations: bool = False
    required_conversation_resolution: bool = True
    lock_branch: bool = False
    allow_fork_syncing: bool = True

    def to_payload(self) -> dict:
        return {
            "required_status_checks": {
                "strict": self.strict_status_checks,
                "contexts": list(self.status_checks)
            },
            "enforce_admins": self.enforce_admins,
            "required_pull_request_reviews": {
                "dismissal_restrictions": {},
                "dismiss_stale_reviews": self.reviews.dismiss_stale_reviews,
                "require_code_owner_reviews": self.reviews.require_code_owner_reviews,
                "required_approving_review_count": self.reviews.required_approving_review_count,
                "require_last_push_approval": self.reviews.require_last_push_approval
            },
            "restrictions": None,
            "required_linear_history": self.required_linear_history,
            "allow_force_pushes": self.allow_force_pushes,
            "allow_deletions": self.allow_deletions,
            "block_creations": self.block_creations,
            "required_conversation_resolution": self.required_conversation_resolution,
            "lock_branch": self.lock_branch,
            "allow_fork_syncing": self.allow_fork_syncing
        }


def derive_policy(base: ProtectionPolicy, overrides: dict) -> ProtectionPolicy:
    """Return a copy of ``base`` with ``overrides`` applied.

    Keys may name a ProtectionPolicy field or a ReviewRequirements field;
    review keys are applied to the nested review requirements.
    """
    policy_keys = {f.name for f in fields(ProtectionPolicy)}
    review_keys = {f.name for f in fields(ReviewRequirements)}

    policy_changes = {}
    review_changes = {}
    for key, value in overrides.items():
        if key in review_keys:
            review_changes[key] = value
        elif key in policy_keys:
            policy_changes[key] = value
        else:
            raise ValueError(f"Unknown protection setting: {key}")

    if "status_checks" in policy_changes:
        policy_changes["status_checks"] = tuple(policy_changes["status_checks"])
    if review_changes:
        reviews = policy_changes.get("reviews", base.reviews)
        policy_changes["reviews"] = replace(reviews, **review_changes)

    return replace(base, **policy_changes)


# Stricter policy for the primary branch
MAIN_POLICY = ProtectionPolicy()

# No approval required for develop
DEVELOP_POLICY = derive_policy(MAIN_POLICY, {"required_approving_review_count": 0})
