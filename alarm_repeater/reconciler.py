# reconciler.py
# 通知先ごとに「最後に届いた ALARM 通知」を求め、再送か状態リセットかを決める。
# I/O なし。同じ入力なら同じ結果。

from dataclasses import dataclass, field
from enum import Enum

from .config import ALERTING_STATE
from .history import DecodedNotification, StructuredMessage


class Decision(Enum):
    NOTHING_TO_DO = "nothing_to_do"
    RESEND = "resend"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Reconciliation:
    decision: Decision
    plan: dict[str, StructuredMessage] = field(default_factory=dict)
    missing: tuple[str, ...] = ()


def latest_per_channel(
    channels, notifications, alerting_state: str = ALERTING_STATE
) -> dict[str, DecodedNotification]:
    """channels に含まれ NewStateValue が alerting_state のものから、通知先ごとに最新 1 件。
    同時刻は先に出現した方を残す。
    """
    wanted = set(channels)
    latest: dict[str, DecodedNotification] = {}
    for n in notifications:
        if n.channel not in wanted or n.message.new_state_value != alerting_state:
            continue
        current = latest.get(n.channel)
        if current is None or n.delivered_at > current.delivered_at:
            latest[n.channel] = n
    return latest


def reconcile(channels, notifications, alerting_state: str = ALERTING_STATE) -> Reconciliation:
    channels = list(dict.fromkeys(channels))
    if not channels:
        return Reconciliation(Decision.NOTHING_TO_DO)

    latest = latest_per_channel(channels, notifications, alerting_state)
    missing = tuple(c for c in channels if c not in latest)
    if missing:
        return Reconciliation(Decision.FALLBACK, missing=missing)

    # 通知先の並び順どおりに詰める
    plan = {c: latest[c].message for c in channels}
    return Reconciliation(Decision.RESEND, plan=plan)
