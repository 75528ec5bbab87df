"""区検索サービス"""
import asyncio
from typing import Callable, Optional

from ..domain.state import (
    STATUS_LOCATION_UNAVAILABLE,
    STATUS_PERMISSION_DENIED,
    AddressResolved,
    LocationAcquired,
    LookupEvent,
    LookupFailed,
    LookupStarted,
    LookupState,
    reduce,
)
from ...district.domain.resolver import is_known_arrondissement, resolve_district
from ...geocoding.domain.models import Address, Coordinate
from ...geocoding.services.geocoding_service import GeocodingService
from ...location.services.location_service import LocationService
from ....shared.exceptions.errors import LocationError, LocationPermissionError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

StateListener = Callable[[LookupState], None]


class DistrictLookupService:
    """
    区検索サービス

    現在地取得 → 逆ジオコーディング → 区番号導出 を連結し、
    結果をイミュータブルな LookupState として公開する。
    逆ジオコーディングは常に1件のみ実行し、新しい座標が来たら古い処理はキャンセルする
    """

    def __init__(
        self,
        location_service: LocationService,
        geocoding_service: GeocodingService,
    ) -> None:
        """
        Args:
            location_service: 位置情報取得サービス
            geocoding_service: ジオコーディングサービス
        """
        self.location_service = location_service
        self.geocoding_service = geocoding_service

        self._state = LookupState()
        self._listeners: list[StateListener] = []
        self._in_flight: Optional[asyncio.Task[None]] = None

        logger.info("DistrictLookupService initialized")

    @property
    def state(self) -> LookupState:
        """最新の状態"""
        return self._state

    def add_listener(self, listener: StateListener) -> None:
        """状態が更新されるたびに呼ばれるリスナーを登録"""
        self._listeners.append(listener)

    def _dispatch(self, event: LookupEvent) -> None:
        new_state = reduce(self._state, event)
        if new_state == self._state:
            return

        self._state = new_state
        for listener in self._listeners:
            listener(new_state)

    async def resolve_address(self, coordinate: Coordinate) -> Optional[Address]:
        """座標の住所を取得（失敗時はNone）"""
        return await self.geocoding_service.resolve_address(coordinate)

    async def district_for_coordinate(
        self, latitude: float, longitude: float
    ) -> Optional[int]:
        """
        座標から区番号を求める

        状態は更新しない

        Args:
            latitude: 緯度
            longitude: 経度

        Returns:
            Optional[int]: 区番号（パリ外・住所なし・失敗時はNone）
        """
        address = await self.resolve_address(Coordinate(latitude, longitude))
        return resolve_district(address.postal_code if address else None)

    def submit(self, coordinate: Coordinate) -> "asyncio.Task[None]":
        """
        座標の逆ジオコーディングを開始

        実行中の処理があればキャンセルしてから開始する

        Args:
            coordinate: 座標

        Returns:
            asyncio.Task[None]: 逆ジオコーディングのタスク
        """
        self._cancel_in_flight()

        self._dispatch(LocationAcquired(coordinate))
        task = asyncio.get_running_loop().create_task(self._geocode(coordinate))
        self._in_flight = task
        return task

    async def refresh(self) -> LookupState:
        """
        現在地を取得し直し、区番号を求める

        Returns:
            LookupState: 処理後の状態
        """
        self._cancel_in_flight()
        self._dispatch(LookupStarted())

        try:
            coordinate = await self.location_service.acquire()
        except LocationPermissionError as e:
            logger.warning(f"Location permission denied: {e}")
            self._cancel_in_flight()
            self._dispatch(LookupFailed(STATUS_PERMISSION_DENIED))
            return self._state
        except LocationError as e:
            logger.error(f"Location unavailable: {e}")
            self._cancel_in_flight()
            self._dispatch(LookupFailed(STATUS_LOCATION_UNAVAILABLE))
            return self._state

        # 取得中に別のrefreshが投入した処理が残っていれば破棄
        self._cancel_in_flight()
        task = self.submit(coordinate)

        # 新しい座標に置き換えられた場合、taskはキャンセル済みで終わる
        await asyncio.wait({task})
        if task.cancelled():
            logger.info(f"Lookup for {coordinate} was superseded")
        else:
            task.result()

        return self._state

    async def _geocode(self, coordinate: Coordinate) -> None:
        address = await self.resolve_address(coordinate)

        self._dispatch(AddressResolved(coordinate, address))

        postal_code = address.postal_code if address else None
        district = resolve_district(postal_code)
        logger.info(f"Postal code: {postal_code}, Arrondissement: {district}")

        if district is not None and not is_known_arrondissement(district):
            logger.warning(
                f"Postal code {postal_code} yields district {district}, "
                f"which is not one of the 20 arrondissements"
            )

    def _cancel_in_flight(self) -> None:
        if self._in_flight is not None and not self._in_flight.done():
            logger.debug("Cancelling in-flight geocoding task")
            self._in_flight.cancel()
        self._in_flight = None
