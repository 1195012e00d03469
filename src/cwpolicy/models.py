"""Core data models for CloudWatch log group retention."""

from dataclasses import dataclass, field
from enum import StrEnum

SUPPORTED_PROVIDER = "aws"
LOG_GROUP_TYPE = "AWS::Logs::LogGroup"


class DeletionPolicy(StrEnum):
    """CloudFormation DeletionPolicy values applied to log groups."""

    RETAIN = "Retain"
    DELETE = "Delete"


@dataclass(frozen=True)
class PolicyConfig:
    """Resolved plugin configuration."""

    retain_logs: bool = False

    @property
    def deletion_policy(self) -> DeletionPolicy:
        return DeletionPolicy.RETAIN if self.retain_logs else DeletionPolicy.DELETE


@dataclass(frozen=True)
class DeploymentTarget:
    """The stack a template is about to be deployed to."""

    provider: str
    stack_name: str
    region: str | None = None


@dataclass(frozen=True)
class StackInfo:
    """An existing CloudFormation stack."""

    stack_id: str
    stack_name: str
    status: str


@dataclass(frozen=True)
class ExternalLogGroup:
    """A log group that already exists in CloudWatch Logs."""

    name: str
    arn: str | None = None


@dataclass(frozen=True)
class ReconcileReport:
    """Outcome of reconciling one template."""

    stack_name: str
    first_deploy: bool
    policy: DeletionPolicy
    removed: list[str] = field(default_factory=list)
    managed: list[str] = field(default_factory=list)
