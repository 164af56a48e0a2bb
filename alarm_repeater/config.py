# config.py
import os
from dataclasses import dataclass

# === 環境変数 ===
#  AWS_REGION        : Lambda ランタイムが設定（件名にも使う）
#  STATE_MACHINE_ARN : 調査ワークフロー（Step Functions）。filter 側のみ必須
#  LOG_LEVEL         : 既定 INFO
DEFAULT_REGION = "us-east-1"
ALERTING_STATE = "ALARM"


@dataclass(frozen=True)
class Config:
    region: str
    state_machine_arn: str | None
    log_level: str

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        env = os.environ if environ is None else environ
        return cls(
            region=env.get("AWS_REGION") or DEFAULT_REGION,
            state_machine_arn=env.get("STATE_MACHINE_ARN") or None,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
