"""区検索の状態スナップショットと更新関数"""
from dataclasses import dataclass, replace
from typing import Optional, Union

from ...district.domain.resolver import resolve_district
from ...geocoding.domain.models import Address, Coordinate

# 状態メッセージ
STATUS_PERMISSION_DENIED = "Permission Denied"
STATUS_LOCATION_UNAVAILABLE = "Location Unavailable"


@dataclass(frozen=True)
class LookupState:
    """
    区検索の状態（イミュータブル）

    更新は reduce() を通じてのみ行い、常に新しいスナップショットを返す
    """

    coordinate: Optional[Coordinate] = None  # 現在地
    postal_code: Optional[str] = None  # 郵便番号
    district_number: Optional[int] = None  # 区番号
    is_loading: bool = False  # 検索中か
    status: Optional[str] = None  # エラー時の状態メッセージ

    def to_dict(self) -> dict[str, object]:
        """JSON出力用の辞書に変換"""
        return {
            "latitude": self.coordinate.latitude if self.coordinate else None,
            "longitude": self.coordinate.longitude if self.coordinate else None,
            "postal_code": self.postal_code,
            "district_number": self.district_number,
            "is_loading": self.is_loading,
            "status": self.status,
        }


@dataclass(frozen=True)
class LookupStarted:
    """検索開始"""


@dataclass(frozen=True)
class LocationAcquired:
    """現在地を取得した"""

    coordinate: Coordinate


@dataclass(frozen=True)
class AddressResolved:
    """座標の住所を解決した（見つからない場合はaddress=None）"""

    coordinate: Coordinate
    address: Optional[Address]


@dataclass(frozen=True)
class LookupFailed:
    """位置情報の取得に失敗した"""

    status: str


LookupEvent = Union[LookupStarted, LocationAcquired, AddressResolved, LookupFailed]


def reduce(state: LookupState, event: LookupEvent) -> LookupState:
    """
    イベントを適用した新しい状態を返す

    Args:
        state: 現在の状態
        event: 適用するイベント

    Returns:
        LookupState: 新しい状態
    """
    if isinstance(event, LookupStarted):
        # 前回の結果は即座にクリア
        return LookupState(is_loading=True)

    if isinstance(event, LocationAcquired):
        return replace(
            state,
            coordinate=event.coordinate,
            postal_code=None,
            district_number=None,
            is_loading=True,
            status=None,
        )

    if isinstance(event, AddressResolved):
        # LocationAcquiredで設定された座標以外への結果（遅れて届いたもの等）は無視
        if state.coordinate != event.coordinate:
            return state

        postal_code = event.address.postal_code if event.address else None
        return replace(
            state,
            coordinate=event.coordinate,
            postal_code=postal_code,
            district_number=resolve_district(postal_code),
            is_loading=False,
            status=None,
        )

    if isinstance(event, LookupFailed):
        return LookupState(is_loading=False, status=event.status)

    raise TypeError(f"Unknown lookup event: {event!r}")
