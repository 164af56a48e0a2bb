# errors.py


class AlarmRepeaterError(Exception):
    pass


class ConfigurationError(AlarmRepeaterError):
    pass


class AlarmNotFoundError(AlarmRepeaterError, LookupError):
    """DescribeAlarms が 1 件に絞れなかった"""


class DecodeError(AlarmRepeaterError, ValueError):
    pass


class HistoryDecodeError(DecodeError):
    """Action 履歴の HistoryData が壊れている"""


class PayloadDecodeError(DecodeError):
    """publishedMessage の二重 JSON が読めない"""


class PublishError(AlarmRepeaterError):
    def __init__(self, channel: str, cause: Exception):
        super().__init__(f"Publish to {channel} failed: {cause}")
        self.channel = channel
        self.cause = cause


class StateWriteError(AlarmRepeaterError):
    def __init__(self, alarm_name: str, state_value: str, cause: Exception):
        super().__init__(f"SetAlarmState({state_value}) failed for {alarm_name}: {cause}")
        self.alarm_name = alarm_name
        self.state_value = state_value
        self.cause = cause
