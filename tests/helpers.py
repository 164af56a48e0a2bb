"""Builders for CloudWatch Action history items and alarm descriptions."""

import json
from datetime import datetime, timezone

ALARM_NAME = "some-alarm-name"
TOPIC = "arn:aws:sns:eu-west-1:123456:some-topic-name"
ANOTHER_TOPIC = "arn:aws:sns:eu-west-1:123456:another-topic-name"
ASG_POLICY = (
    "arn:aws:autoscaling:eu-west-1:123456:scalingPolicy:abc:"
    "autoScalingGroupName/web:policyName/scale-out"
)
BASE_TIMESTAMP = 1667756633496


def alert_fields(new_state="ALARM", old_state="OK", reason="forced test reason", actions=(TOPIC,)):
    return {
        "AlarmName": ALARM_NAME,
        "AlarmDescription": "Test dummy alarm",
        "AWSAccountId": "123456",
        "NewStateValue": new_state,
        "NewStateReason": reason,
        "StateChangeTime": "2022-11-06T17:43:53.496+0000",
        "Region": "EU (Ireland)",
        "AlarmArn": f"arn:aws:cloudwatch:eu-west-1:123456:alarm:{ALARM_NAME}",
        "OKActions": [],
        "AlarmActions": list(actions),
        "InsufficientDataActions": [],
        "OldStateValue": old_state,
        "TriggeringChildren": [],
    }


def published_message(**kwargs) -> str:
    return json.dumps(
        {
            "default": json.dumps(alert_fields(**kwargs)),
            "sms": f'ALARM: "{ALARM_NAME}" in EU (Ireland)',
            "email": f'You are receiving this email because your Amazon CloudWatch Alarm "{ALARM_NAME}" ...',
        }
    )


def default_body(**kwargs) -> str:
    return json.loads(published_message(**kwargs))["default"]


def history_item(
    channel=TOPIC,
    timestamp=BASE_TIMESTAMP,
    payload=None,
    action_state="Succeeded",
    **kwargs,
) -> dict:
    data = {
        "actionState": action_state,
        "stateUpdateTimestamp": timestamp,
        "notificationResource": channel,
        "publishedMessage": payload if payload is not None else published_message(**kwargs),
    }
    return {
        "AlarmName": ALARM_NAME,
        "AlarmType": "MetricAlarm",
        "Timestamp": datetime.fromtimestamp(timestamp / 1000, timezone.utc),
        "HistoryItemType": "Action",
        "HistorySummary": f"Successfully executed action {channel}",
        "HistoryData": json.dumps(data),
    }


def set_history(cloudwatch, *items: dict) -> None:
    cloudwatch.get_paginator.return_value.paginate.return_value = [{"AlarmHistoryItems": list(items)}]


def metric_alarm(state="ALARM", alarm_actions=(TOPIC,), ok_actions=(), **extra) -> dict:
    desc = {
        "AlarmName": ALARM_NAME,
        "AlarmArn": f"arn:aws:cloudwatch:eu-west-1:123456:alarm:{ALARM_NAME}",
        "StateValue": state,
        "ActionsEnabled": True,
        "AlarmActions": list(alarm_actions),
        "OKActions": list(ok_actions),
        "InsufficientDataActions": [],
        "MetricName": "Errors",
        "Namespace": "AWS/Lambda",
        "Dimensions": [{"Name": "FunctionName", "Value": "dummy-function"}],
    }
    desc.update(extra)
    return desc
