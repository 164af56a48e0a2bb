# history.py
# DescribeAlarmHistory(HistoryItemType=Action) の 1 件は以下のような形:
# {
#   "AlarmName": "some-alarm",
#   "HistoryItemType": "Action",
#   "Timestamp": datetime(...),
#   "HistoryData": "{\"actionState\":\"Succeeded\",
#                    \"stateUpdateTimestamp\":1667756633496,
#                    \"notificationResource\":\"arn:aws:sns:...:topic\",
#                    \"publishedMessage\":\"{\\\"default\\\":\\\"{...}\\\",\\\"sms\\\":...}\"}"
# }
# publishedMessage は形式ごとの本文を持つ JSON で、default 本文がさらに JSON（二重エンコード）。

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .errors import DecodeError, HistoryDecodeError, PayloadDecodeError

logger = logging.getLogger(__name__)

ACTION_ITEM_TYPE = "Action"


@dataclass(frozen=True)
class DeliveryRecord:
    channel: str
    delivered_at: int  # epoch millis
    raw_payload: str
    action_state: str | None = None


@dataclass(frozen=True)
class StructuredMessage:
    """publishedMessage を展開したもの。default は再送時にそのまま使う本文。"""

    default: str
    formats: dict[str, Any] = field(default_factory=dict)
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def new_state_value(self) -> str | None:
        return self.fields.get("NewStateValue")

    @property
    def old_state_value(self) -> str | None:
        return self.fields.get("OldStateValue")

    @property
    def alarm_name(self) -> str | None:
        return self.fields.get("AlarmName")

    @property
    def alarm_description(self) -> str | None:
        return self.fields.get("AlarmDescription")

    @property
    def new_state_reason(self) -> str | None:
        return self.fields.get("NewStateReason")

    @property
    def state_change_time(self) -> str | None:
        return self.fields.get("StateChangeTime")

    @property
    def alarm_actions(self) -> list[str]:
        return list(self.fields.get("AlarmActions") or [])

    @property
    def ok_actions(self) -> list[str]:
        return list(self.fields.get("OKActions") or [])

    @property
    def insufficient_data_actions(self) -> list[str]:
        return list(self.fields.get("InsufficientDataActions") or [])


@dataclass(frozen=True)
class DecodedNotification:
    channel: str
    delivered_at: int
    message: StructuredMessage


def _to_epoch_millis(ts) -> int | None:
    if isinstance(ts, bool):
        return None
    if isinstance(ts, int):
        return ts
    if isinstance(ts, float):
        return int(ts)
    if isinstance(ts, datetime):
        return int(ts.timestamp() * 1000)
    return None


def decode_history_item(item: dict) -> DeliveryRecord | None:
    """Action 履歴 1 件 -> DeliveryRecord。
    Action 以外、または通知（publishedMessage）を伴わない Action は None。
    """
    if item.get("HistoryItemType") != ACTION_ITEM_TYPE:
        return None

    raw = item.get("HistoryData")
    if not raw:
        raise HistoryDecodeError("Action history item without HistoryData")
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise HistoryDecodeError(f"HistoryData is not JSON: {e}") from e
    if not isinstance(data, dict) or not data.get("notificationResource"):
        raise HistoryDecodeError("HistoryData has no notificationResource")

    payload = data.get("publishedMessage")
    if payload is None:
        # AutoScaling / SSM などの実行履歴
        return None
    if not isinstance(payload, str):
        raise HistoryDecodeError("publishedMessage is not a string")

    delivered_at = _to_epoch_millis(data.get("stateUpdateTimestamp"))
    if delivered_at is None:
        delivered_at = _to_epoch_millis(item.get("Timestamp"))
    if delivered_at is None:
        raise HistoryDecodeError("Action history item without timestamp")

    return DeliveryRecord(
        channel=data["notificationResource"],
        delivered_at=delivered_at,
        raw_payload=payload,
        action_state=data.get("actionState"),
    )


def decode_payload(raw: str) -> StructuredMessage:
    try:
        outer = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PayloadDecodeError(f"publishedMessage is not JSON: {e}") from e
    if not isinstance(outer, dict) or not isinstance(outer.get("default"), str):
        raise PayloadDecodeError("publishedMessage has no default body")

    default = outer["default"]
    try:
        fields = json.loads(default)
    except ValueError as e:
        raise PayloadDecodeError(f"default body is not JSON: {e}") from e
    if not isinstance(fields, dict):
        raise PayloadDecodeError("default body is not a JSON object")

    return StructuredMessage(default=default, formats=outer, fields=fields)


def decode_history(items) -> list[DecodedNotification]:
    """壊れた履歴はログに残して捨てる（全体は止めない）"""
    decoded = []
    for item in items:
        try:
            record = decode_history_item(item)
            if record is None:
                continue
            message = decode_payload(record.raw_payload)
        except DecodeError as e:
            logger.warning("Dropping undecodable history item of %s: %s", item.get("AlarmName"), e)
            continue
        decoded.append(DecodedNotification(record.channel, record.delivered_at, message))
    return decoded
