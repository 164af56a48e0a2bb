# alarm_repeater
# 目的:
#  - ALARM 状態のまま残っている CloudWatch アラームの通知を再送する
#  - 再送できない場合は OK -> ALARM と状態を戻してネイティブ評価に再通知させる
