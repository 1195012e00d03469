"""Thin boto3 wrappers for the CloudFormation and CloudWatch Logs lookups."""

import boto3
from botocore.exceptions import ClientError

from cwpolicy.errors import StackNotFoundError
from cwpolicy.models import ExternalLogGroup, StackInfo


def _client_kwargs(region: str | None) -> dict:
    return {"region_name": region} if region else {}


def _is_missing_stack(error: ClientError) -> bool:
    """CloudFormation reports an unknown stack as a 400 ValidationError."""
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    message = error.response.get("Error", {}).get("Message", "")
    return status == 400 and "does not exist" in message


class CloudFormationClient:
    """Answers whether a stack already exists."""

    def __init__(self, region: str | None = None):
        self._client = boto3.client("cloudformation", **_client_kwargs(region))

    def describe_stack(self, stack_name: str) -> StackInfo:
        """Describe a stack. Raises StackNotFoundError if it was never created."""
        try:
            resp = self._client.describe_stacks(StackName=stack_name)
        except ClientError as err:
            if _is_missing_stack(err):
                raise StackNotFoundError(stack_name) from err
            raise

        stack = resp["Stacks"][0]
        return StackInfo(
            stack_id=stack["StackId"],
            stack_name=stack["StackName"],
            status=stack.get("StackStatus", ""),
        )


class CloudWatchLogsClient:
    """Lists log groups that already exist in CloudWatch Logs."""

    def __init__(self, region: str | None = None):
        self._client = boto3.client("logs", **_client_kwargs(region))

    def list_log_groups(self, prefix: str) -> list[ExternalLogGroup]:
        """Return every log group whose name starts with ``prefix``."""
        paginator = self._client.get_paginator("describe_log_groups")
        results = []
        for page in paginator.paginate(logGroupNamePrefix=prefix):
            for group in page.get("logGroups", []):
                results.append(ExternalLogGroup(name=group["logGroupName"], arn=group.get("arn")))
        return results
