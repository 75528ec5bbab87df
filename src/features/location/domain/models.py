"""位置情報取得機能のドメインモデル"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...geocoding.domain.models import Coordinate
from ....shared.utils.datetime_utils import elapsed_ms, now_utc


@dataclass(frozen=True)
class LocationFix:
    """ある時点で観測された位置"""

    coordinate: Coordinate
    observed_at: datetime = field(default_factory=now_utc)  # 観測日時（UTC）

    def age_ms(self, now: Optional[datetime] = None) -> int:
        """観測からの経過時間（ミリ秒）"""
        return elapsed_ms(self.observed_at, now or now_utc())


@dataclass(frozen=True)
class LocationRequest:
    """
    位置更新の購読条件

    IP・固定座標のプロバイダーが参照するのは interval_ms と min_update_interval_ms のみ。
    max_update_delay_ms と high_accuracy は端末のGPS等、バッチ配信や精度を選べる
    プロバイダー向けのヒントで、現在の実装では無視される
    """

    interval_ms: int = 1000  # 希望する更新間隔
    min_update_interval_ms: int = 500  # 更新の最小間隔
    max_update_delay_ms: int = 2000  # 更新をまとめて遅延できる最大時間
    high_accuracy: bool = True  # 高精度を要求するか
