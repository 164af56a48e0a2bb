# app.py
# Lambda エントリポイント
#  - filter_handler  : EventBridge の "CloudWatch Alarm State Change" を受けて対象なら調査ワークフロー起動
#  - checker_handler : ワークフローから呼ばれ、まだ ALARM なら通知を再送（またはリセット）
import json
import logging
from functools import lru_cache

from .actions import has_any_sns_action, has_autoscaling_actions
from .alarms import Alarm, get_alarm, is_retriggered_alarm
from .clients import build_clients
from .config import ALERTING_STATE, Config
from .retrigger import AlarmRetrigger
from .workflow import start_alarm_checker

CONFIG = Config.from_env()

logger = logging.getLogger()
logger.setLevel(CONFIG.log_level)


@lru_cache(maxsize=1)
def get_clients():
    """コンテナ単位で 1 回だけ作る"""
    return build_clients(CONFIG.region)


def is_alarm_of_interest(alarm: Alarm) -> bool:
    if has_autoscaling_actions(alarm):
        logger.debug("Autoscaling alarm triggered: %s", alarm.name)
        return False
    if not alarm.actions_enabled:
        logger.debug("Disabled alarm triggered: %s", alarm.name)
        return False
    return has_any_sns_action(alarm)


def filter_handler(event, _context):
    logger.info("Received %s", json.dumps(event, default=str))
    detail = event["detail"]

    if is_retriggered_alarm(detail):
        logger.debug("Skipping retriggered alarm %s", detail.get("alarmName"))
        return event

    clients = get_clients()
    alarm = get_alarm(clients.cloudwatch, detail["alarmName"])
    if not is_alarm_of_interest(alarm):
        logger.debug("Skipping alarm %s", alarm.name)
        return event

    execution_arn = start_alarm_checker(clients.sfn, CONFIG.state_machine_arn, event)
    logger.info("Started alarm checker %s", execution_arn)
    return event


def checker_handler(event, _context):
    logger.info("Received %s", json.dumps(event, default=str))

    clients = get_clients()
    alarm = get_alarm(clients.cloudwatch, event["detail"]["alarmName"])
    if alarm.state_value == ALERTING_STATE:
        result = AlarmRetrigger(clients.cloudwatch, clients.sns, CONFIG.region).retrigger(alarm)
        logger.info("Retrigger result %s", json.dumps(result))

    # ステートマシンの Choice で currentState を見てループを抜ける
    return {**event, "currentState": alarm.state_value}
