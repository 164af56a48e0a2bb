"""Shared fixtures: fake boto3 clients."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def cloudwatch() -> MagicMock:
    client = MagicMock()
    client.get_paginator.return_value.paginate.return_value = [{"AlarmHistoryItems": []}]
    client.describe_alarms.return_value = {"MetricAlarms": [], "CompositeAlarms": []}
    return client


@pytest.fixture
def sns() -> MagicMock:
    client = MagicMock()
    client.publish.return_value = {"MessageId": "msg-1"}
    return client


@pytest.fixture
def sfn() -> MagicMock:
    client = MagicMock()
    client.start_execution.return_value = {
        "executionArn": "arn:aws:states:eu-west-1:123456:execution:checker:x"
    }
    return client
