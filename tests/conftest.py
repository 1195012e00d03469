"""Shared test fixtures."""

from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from cwpolicy.models import DeploymentTarget, StackInfo

STACK_NAME = "mock-test-stack"
FIRST_LOG_GROUP = f"/aws/lambda/{STACK_NAME}-first"
SECOND_LOG_GROUP = f"/aws/lambda/{STACK_NAME}-second"

SIMPLE_TEMPLATE = """{
    "AWSTemplateFormatVersion": "2010-09-09",
    "Resources": {
        "MyQueue": {
            "Type": "AWS::SQS::Queue",
            "Properties": {
                "QueueName": "my-test-queue"
            }
        }
    }
}"""


@pytest.fixture
def aws_credentials(monkeypatch):
    """Set dummy AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def logs_client(aws_credentials):
    """Create a moto-mocked CloudWatch Logs boto3 client."""
    with mock_aws():
        yield boto3.client("logs", region_name="us-east-1")


@pytest.fixture
def template():
    """Compiled template with 2 log groups, each depended on by one function."""
    return {
        "AWSTemplateFormatVersion": "2010-09-09",
        "Resources": {
            "FirstLogGroup": {
                "Type": "AWS::Logs::LogGroup",
                "Properties": {"LogGroupName": FIRST_LOG_GROUP},
            },
            "SecondLogGroup": {
                "Type": "AWS::Logs::LogGroup",
                "Properties": {"LogGroupName": SECOND_LOG_GROUP},
            },
            "FirstFunction": {
                "Type": "AWS::Lambda::Function",
                "DependsOn": ["FirstLogGroup", "LambdaExecutionRole"],
            },
            "SecondFunction": {
                "Type": "AWS::Lambda::Function",
                "DependsOn": ["SecondLogGroup", "LambdaExecutionRole"],
            },
        },
    }


@pytest.fixture
def target():
    return DeploymentTarget(provider="aws", stack_name=STACK_NAME, region="us-east-1")


@pytest.fixture
def stack_query():
    """StackQuery fake reporting an existing stack."""
    query = MagicMock()
    query.describe_stack.return_value = StackInfo(
        stack_id=f"arn:aws:cloudformation:us-east-1:123:stack/{STACK_NAME}/uuid",
        stack_name=STACK_NAME,
        status="UPDATE_COMPLETE",
    )
    return query


@pytest.fixture
def inventory_query():
    """InventoryQuery fake with no existing log groups."""
    query = MagicMock()
    query.list_log_groups.return_value = []
    return query
