# retrigger.py
# 流れ:
#  - SNS 通知先が無ければ何もしない（履歴も引かない）
#  - Action 履歴を取得 -> 展開 -> reconcile
#  - RESEND   : 通知先ごとに最後の ALARM 通知本文を再 publish
#  - FALLBACK : SetAlarmState で OK -> ALARM（reason=RETRIGGER）に戻し、CloudWatch 側に再通知させる
#  - 履歴取得や publish で何か失敗したら FALLBACK と同じ扱い

import logging

from botocore.exceptions import ClientError

from .actions import notification_channels
from .alarms import ALARM_TYPES, RETRIGGER_REASON, Alarm
from .config import ALERTING_STATE
from .errors import PublishError, StateWriteError
from .history import ACTION_ITEM_TYPE, StructuredMessage, decode_history
from .reconciler import Decision, reconcile

logger = logging.getLogger(__name__)

SNS_SUBJECT_LIMIT = 100
SUBJECT_TEMPLATE = "ALARM: {name} remains in ALARM state in {region}"


def build_subject(alarm_name: str, region: str) -> str:
    subject = SUBJECT_TEMPLATE.format(name=alarm_name, region=region)
    if len(subject) <= SNS_SUBJECT_LIMIT:
        return subject
    # アラーム名を削って "..." を付ける
    overflow = len(subject) - SNS_SUBJECT_LIMIT + 3
    if overflow >= len(alarm_name):
        return subject[:SNS_SUBJECT_LIMIT]
    return SUBJECT_TEMPLATE.format(name=alarm_name[:-overflow] + "...", region=region)


class AlarmRetrigger:
    def __init__(self, cloudwatch, sns, region: str):
        self.cloudwatch = cloudwatch
        self.sns = sns
        self.region = region

    def fetch_history(self, alarm_name: str) -> list[dict]:
        items = []
        paginator = self.cloudwatch.get_paginator("describe_alarm_history")
        for page in paginator.paginate(
            AlarmName=alarm_name,
            AlarmTypes=ALARM_TYPES,
            HistoryItemType=ACTION_ITEM_TYPE,
            ScanBy="TimestampDescending",
        ):
            items.extend(page.get("AlarmHistoryItems", []))
        return items

    def publish(self, channel: str, subject: str, message: StructuredMessage) -> str | None:
        try:
            r = self.sns.publish(TopicArn=channel, Subject=subject, Message=message.default)
        except ClientError as e:
            raise PublishError(channel, e) from e
        logger.info("Published to %s", channel)
        return r.get("MessageId")

    def reset(self, alarm_name: str) -> None:
        # 順序固定: OK -> ALARM
        for state_value in ("OK", ALERTING_STATE):
            try:
                self.cloudwatch.set_alarm_state(
                    AlarmName=alarm_name,
                    StateValue=state_value,
                    StateReason=RETRIGGER_REASON,
                )
            except ClientError as e:
                logger.error("Could not set %s to %s: %s", alarm_name, state_value, e)
                raise StateWriteError(alarm_name, state_value, e) from e
        logger.info("Alarm %s reset (OK -> %s)", alarm_name, ALERTING_STATE)

    def retrigger(self, alarm: Alarm) -> dict:
        channels = notification_channels(alarm.alarm_actions)
        if not channels:
            return {"status": "skipped", "alarmName": alarm.name, "reason": "no sns alarm actions"}

        try:
            items = self.fetch_history(alarm.name)
            result = reconcile(channels, decode_history(items))
        except Exception:
            logger.exception("Could not read alarm history of %s", alarm.name)
            return self._fallback(alarm.name, "history unavailable")

        if result.decision is not Decision.RESEND:
            logger.warning(
                "Triggered alarm %s never delivered all actions, missing: %s",
                alarm.name,
                list(result.missing),
            )
            return self._fallback(alarm.name, "incomplete history")

        subject = build_subject(alarm.name, self.region)
        sent = []
        try:
            for channel, message in result.plan.items():
                self.publish(channel, subject, message)
                sent.append(channel)
        except Exception:
            logger.exception("Could not retrigger alarm %s (sent: %s)", alarm.name, sent)
            return self._fallback(alarm.name, "publish failed")

        return {"status": "resent", "alarmName": alarm.name, "channels": sent}

    def _fallback(self, alarm_name: str, reason: str) -> dict:
        self.reset(alarm_name)
        return {"status": "reset", "alarmName": alarm_name, "reason": reason}
