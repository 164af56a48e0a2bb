# workflow.py
# 調査用ステートマシン（Step Functions）を起動する
import json
import re

from .errors import ConfigurationError

# 実行名は英数字のみ・80 文字まで
_NAME_UNSAFE = re.compile(r"[^a-zA-Z0-9]")
MAX_EXECUTION_NAME = 80


def build_workflow_name(event: dict) -> str:
    raw = f"{event.get('id', '')}{event['detail']['alarmName']}"
    return _NAME_UNSAFE.sub("", raw)[:MAX_EXECUTION_NAME]


def start_alarm_checker(sfn, state_machine_arn: str | None, event: dict) -> str | None:
    if not state_machine_arn:
        raise ConfigurationError("STATE_MACHINE_ARN is not set")
    resp = sfn.start_execution(
        stateMachineArn=state_machine_arn,
        name=build_workflow_name(event),
        input=json.dumps(event, ensure_ascii=False, default=str),
    )
    return resp.get("executionArn")
