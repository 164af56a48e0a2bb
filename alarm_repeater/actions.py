# actions.py
# アラームアクションの分類（SNS 通知先 / AutoScaling）

_SNS_PREFIXES = ("arn:aws:sns", "arn:aws-cn:sns", "arn:aws-us-gov:sns")


def is_sns_action(resource: str) -> bool:
    return resource.startswith(_SNS_PREFIXES)


def is_autoscaling_action(resource: str) -> bool:
    return "autoscaling" in resource


def alarm_actions_of(alarm) -> list[str]:
    """OKActions + AlarmActions"""
    return list(alarm.ok_actions) + list(alarm.alarm_actions)


def has_autoscaling_actions(alarm) -> bool:
    return any(is_autoscaling_action(a) for a in alarm_actions_of(alarm))


def has_any_sns_action(alarm) -> bool:
    return any(is_sns_action(a) for a in alarm_actions_of(alarm))


def notification_channels(actions) -> list[str]:
    """SNS アクションだけを重複なし・元の順序で返す"""
    channels = []
    for action in actions or []:
        if is_sns_action(action) and action not in channels:
            channels.append(action)
    return channels
