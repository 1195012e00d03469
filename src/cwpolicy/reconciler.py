"""Reconciles the CloudWatch log groups declared in a compiled CloudFormation template.

When logs are retained, log groups that already exist in CloudWatch Logs are
dropped from the template (along with every DependsOn reference to them) so
CloudFormation stops trying to create them; every remaining log group gets a
DeletionPolicy matching the configuration.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Protocol

from cwpolicy.errors import (
    InventoryQueryError,
    StackNotFoundError,
    StackQueryError,
    UnsupportedProviderError,
)
from cwpolicy.models import (
    LOG_GROUP_TYPE,
    SUPPORTED_PROVIDER,
    DeploymentTarget,
    ExternalLogGroup,
    PolicyConfig,
    ReconcileReport,
    StackInfo,
)
from cwpolicy.naming import log_group_prefix

logger = logging.getLogger(__name__)

Resources = MutableMapping[str, dict[str, Any]]


class StackQuery(Protocol):
    def describe_stack(self, stack_name: str) -> StackInfo: ...


class InventoryQuery(Protocol):
    def list_log_groups(self, prefix: str) -> list[ExternalLogGroup]: ...


class TemplateReconciler:
    """Applies log group retention to a compiled template, in place."""

    def __init__(self, stacks: StackQuery, log_groups: InventoryQuery):
        self._stacks = stacks
        self._log_groups = log_groups

    def reconcile(
        self,
        template: MutableMapping[str, Any],
        config: PolicyConfig,
        target: DeploymentTarget,
    ) -> ReconcileReport:
        """Reconcile ``template`` for deployment to ``target``.

        Raises UnsupportedProviderError, StackQueryError or InventoryQueryError.
        The template is only modified once both lookups have succeeded.
        """
        if target.provider != SUPPORTED_PROVIDER:
            raise UnsupportedProviderError(target.provider)

        resources: Resources = template.get("Resources") or {}
        candidates = [key for key, res in resources.items() if res.get("Type") == LOG_GROUP_TYPE]
        logger.debug("Found %d log groups in template for %s", len(candidates), target.stack_name)

        first_deploy = self._probe_stack(target.stack_name)

        duplicates: set[str] = set()
        if config.retain_logs:
            duplicates = self._find_existing(resources, candidates, target.stack_name)
            _purge(resources, duplicates)

        policy = config.deletion_policy
        managed = [key for key in candidates if key not in duplicates]
        for key in managed:
            resources[key]["DeletionPolicy"] = policy.value

        removed = [key for key in candidates if key in duplicates]
        if removed:
            logger.info(
                "Removed %d existing log groups from %s: %s",
                len(removed),
                target.stack_name,
                ", ".join(removed),
            )
        logger.info(
            "Applied DeletionPolicy %s to %d log groups in %s",
            policy.value,
            len(managed),
            target.stack_name,
        )

        return ReconcileReport(
            stack_name=target.stack_name,
            first_deploy=first_deploy,
            policy=policy,
            removed=removed,
            managed=managed,
        )

    def _probe_stack(self, stack_name: str) -> bool:
        """Return True if the stack does not exist yet."""
        try:
            self._stacks.describe_stack(stack_name)
        except StackNotFoundError:
            logger.info("Stack %s does not exist yet, treating as first deployment", stack_name)
            return True
        except Exception as err:
            raise StackQueryError(stack_name, err) from err
        return False

    def _find_existing(self, resources: Resources, candidates: list[str], stack_name: str) -> set[str]:
        """Return the logical ids of log groups that already exist in CloudWatch.

        Several resources declaring the same name are all matched.
        """
        by_name: dict[str, list[str]] = {}
        for key in candidates:
            name = (resources[key].get("Properties") or {}).get("LogGroupName")
            # Intrinsic functions (Fn::Sub etc.) can't be compared against real names.
            if isinstance(name, str):
                by_name.setdefault(name, []).append(key)

        prefix = log_group_prefix(stack_name)
        try:
            existing = self._log_groups.list_log_groups(prefix)
        except Exception as err:
            raise InventoryQueryError(stack_name, prefix, err) from err

        duplicates = set()
        for group in existing:
            duplicates.update(by_name.get(group.name, []))
        return duplicates


def _purge(resources: Resources, duplicates: set[str]) -> None:
    """Delete ``duplicates`` and every DependsOn reference to them."""
    if not duplicates:
        return

    for key in list(resources):
        if key in duplicates:
            del resources[key]
            continue

        res = resources[key]
        depends_on = res.get("DependsOn")
        if isinstance(depends_on, list):
            res["DependsOn"] = [d for d in depends_on if d not in duplicates]
        elif isinstance(depends_on, str) and depends_on in duplicates:
            del res["DependsOn"]
