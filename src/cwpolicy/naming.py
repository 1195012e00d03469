"""Stack and log group naming, following the Serverless Framework conventions."""

from dataclasses import dataclass

DEFAULT_STAGE = "dev"
LAMBDA_LOG_NAMESPACE = "/aws/lambda"


@dataclass(frozen=True)
class NamingPolicy:
    """Derives the stack name for a service.

    ``stack_name_override`` mirrors ``provider.stackName`` and wins over the
    ``{service}-{stage}`` default.
    """

    service: str
    stage: str = DEFAULT_STAGE
    stack_name_override: str | None = None

    def stack_name(self) -> str:
        if self.stack_name_override:
            return self.stack_name_override
        return f"{self.service}-{self.stage}"


def log_group_prefix(stack_name: str) -> str:
    """Prefix shared by every Lambda log group of a stack."""
    return f"{LAMBDA_LOG_NAMESPACE}/{stack_name}"
