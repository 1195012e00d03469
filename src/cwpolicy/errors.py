"""Exceptions raised while reconciling log group policies."""


class CloudwatchPolicyError(Exception):
    """Base class for all cwpolicy errors."""


class ConfigError(CloudwatchPolicyError):
    """The cloudwatchPolicy configuration section is invalid."""


class UnsupportedProviderError(CloudwatchPolicyError):
    """The deployment target is not an AWS stack."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Cannot add CloudWatch policy to non-aws provider {provider!r}")


class StackNotFoundError(CloudwatchPolicyError):
    """The stack has never been created. Signals a first deployment."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"Stack {stack_name!r} does not exist")


class StackQueryError(CloudwatchPolicyError):
    """Describing the stack failed for a reason other than it not existing."""

    def __init__(self, stack_name: str, cause: BaseException):
        self.stack_name = stack_name
        self.cause = cause
        super().__init__(f"describe_stacks failed for stack {stack_name!r}: {cause}")


class InventoryQueryError(CloudwatchPolicyError):
    """Listing existing log groups failed."""

    def __init__(self, stack_name: str, prefix: str, cause: BaseException):
        self.stack_name = stack_name
        self.prefix = prefix
        self.cause = cause
        super().__init__(
            f"describe_log_groups failed for stack {stack_name!r} (prefix {prefix!r}): {cause}"
        )
