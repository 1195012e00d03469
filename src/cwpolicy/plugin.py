"""Packaging lifecycle hook for Serverless-style service definitions.

Configuration lives under the service's ``custom`` section::

    custom:
      cloudwatchPolicy:
        retainLogs: true   # default false

With ``retainLogs`` enabled, log groups survive stack deletion. Once a log
group exists it is no longer managed by the stack, so it is removed from the
compiled template on later deploys.
"""

from collections.abc import Mapping
from typing import Any

from cwpolicy.aws.client import CloudFormationClient, CloudWatchLogsClient
from cwpolicy.config import load_config
from cwpolicy.models import DeploymentTarget, ReconcileReport
from cwpolicy.naming import DEFAULT_STAGE, NamingPolicy
from cwpolicy.reconciler import TemplateReconciler

BEFORE_PACKAGE_FINALIZE = "before:package:finalize"


class CloudwatchPolicyPlugin:
    """Wires TemplateReconciler into the host's packaging hooks."""

    def __init__(self, service: Mapping[str, Any], reconciler: TemplateReconciler):
        self._service = service
        self._reconciler = reconciler
        self.config = load_config(service.get("custom"))
        self.hooks = {BEFORE_PACKAGE_FINALIZE: self.add_cloudwatch_policy}

    @classmethod
    def from_service(cls, service: Mapping[str, Any]) -> "CloudwatchPolicyPlugin":
        """Build a plugin talking to AWS in the service's configured region."""
        region = service.get("provider", {}).get("region")
        reconciler = TemplateReconciler(
            CloudFormationClient(region=region),
            CloudWatchLogsClient(region=region),
        )
        return cls(service, reconciler)

    @property
    def naming(self) -> NamingPolicy:
        provider = self._service.get("provider", {})
        return NamingPolicy(
            service=self._service["service"],
            stage=provider.get("stage") or DEFAULT_STAGE,
            stack_name_override=provider.get("stackName"),
        )

    def add_cloudwatch_policy(self) -> ReconcileReport:
        provider = self._service.get("provider", {})
        target = DeploymentTarget(
            provider=provider.get("name", ""),
            stack_name=self.naming.stack_name(),
            region=provider.get("region"),
        )
        template = provider.get("compiledCloudFormationTemplate") or {}
        return self._reconciler.reconcile(template, self.config, target)
