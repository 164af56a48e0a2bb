# alarms.py
import json
from dataclasses import dataclass, field
from typing import Any

from .errors import AlarmNotFoundError

RETRIGGER_REASON = "RETRIGGER"

METRIC_ALARM = "MetricAlarm"
COMPOSITE_ALARM = "CompositeAlarm"
ALARM_TYPES = [COMPOSITE_ALARM, METRIC_ALARM]


@dataclass(frozen=True)
class Alarm:
    """MetricAlarm / CompositeAlarm の共通部分だけを持つ。
    種別固有のキー（Dimensions, AlarmRule など）は raw に残すが参照しない。
    """

    kind: str
    name: str
    arn: str | None = None
    state_value: str | None = None
    alarm_actions: tuple[str, ...] = ()
    ok_actions: tuple[str, ...] = ()
    actions_enabled: bool = True
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_describe(cls, kind: str, desc: dict) -> "Alarm":
        return cls(
            kind=kind,
            name=desc["AlarmName"],
            arn=desc.get("AlarmArn"),
            state_value=desc.get("StateValue"),
            alarm_actions=tuple(desc.get("AlarmActions") or []),
            ok_actions=tuple(desc.get("OKActions") or []),
            actions_enabled=desc.get("ActionsEnabled", True),
            raw=desc,
        )

    @property
    def is_composite(self) -> bool:
        return self.kind == COMPOSITE_ALARM


def get_alarm(cloudwatch, alarm_name: str) -> Alarm:
    r = cloudwatch.describe_alarms(AlarmNames=[alarm_name], AlarmTypes=ALARM_TYPES)

    # MetricAlarm を優先、無ければ CompositeAlarm
    for kind, key in ((METRIC_ALARM, "MetricAlarms"), (COMPOSITE_ALARM, "CompositeAlarms")):
        found = r.get(key) or []
        if len(found) > 1:
            raise AlarmNotFoundError(f"Multiple {kind}s returned for {alarm_name}")
        if found:
            return Alarm.from_describe(kind, found[0])

    raise AlarmNotFoundError(
        f"Alarm not defined: {alarm_name} "
        f"{json.dumps({k: v for k, v in r.items() if k != 'ResponseMetadata'}, default=str)}"
    )


def is_retriggered_alarm(detail: dict) -> bool:
    """自分で SetAlarmState した遷移なら True"""
    return (detail.get("state") or {}).get("reason") == RETRIGGER_REASON
