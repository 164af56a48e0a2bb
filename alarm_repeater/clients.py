# clients.py
from dataclasses import dataclass
from typing import Any

import boto3


@dataclass(frozen=True)
class Clients:
    cloudwatch: Any
    sns: Any
    sfn: Any


def build_clients(region: str) -> Clients:
    """リージョンを明示した Session からクライアントを作る（グローバルには持たない）"""
    session = boto3.session.Session(region_name=region)
    return Clients(
        cloudwatch=session.client("cloudwatch"),
        sns=session.client("sns"),
        sfn=session.client("stepfunctions"),
    )
