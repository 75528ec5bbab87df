"""IPアドレスから現在地を推定する位置情報プロバイダー"""
import asyncio
from typing import Any, AsyncGenerator, Optional

from ..domain.models import LocationFix, LocationRequest
from ...geocoding.domain.models import Coordinate
from .base import LocationProvider
from ....shared.exceptions.errors import HTTPError, LocationUnavailableError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

DEFAULT_IP_LOCATION_URL = "https://ipinfo.io/json"


class IpLocationProvider(LocationProvider):
    """
    IP位置情報サービス（ipinfo.io互換）を使うプロバイダー

    精度は都市レベル。最後に取得した位置をメモリ上に保持し、
    get_last_known_location で返す
    """

    def __init__(
        self, http_client: HTTPClient, url: str = DEFAULT_IP_LOCATION_URL
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント
            url: "loc"フィールド（"緯度,経度"）を返すエンドポイント
        """
        self.http_client = http_client
        self.url = url
        self._last_fix: Optional[LocationFix] = None

        logger.info(f"IpLocationProvider initialized: url={url}")

    async def get_last_known_location(self) -> Optional[LocationFix]:
        return self._last_fix

    async def subscribe_to_location_updates(
        self, request: LocationRequest
    ) -> AsyncGenerator[LocationFix, None]:
        # IP位置情報は粗いため、間隔は最小更新間隔を下回らないようにする
        interval_ms = max(request.interval_ms, request.min_update_interval_ms)

        logger.debug(f"Subscribed to IP location updates: interval={interval_ms}ms")
        try:
            while True:
                fix = await asyncio.to_thread(self._fetch_fix)
                self._last_fix = fix
                yield fix
                await asyncio.sleep(interval_ms / 1000)
        finally:
            logger.debug("IP location subscription closed")

    def _fetch_fix(self) -> LocationFix:
        """
        IP位置情報を1回取得

        Raises:
            LocationUnavailableError: 取得・解析に失敗した場合
        """
        try:
            payload = self.http_client.get_json(self.url)
        except HTTPError as e:
            raise LocationUnavailableError(f"IP location lookup failed: {e}") from e

        coordinate = self.parse_response(payload)
        if coordinate is None:
            raise LocationUnavailableError(f"IP location response has no usable 'loc': {payload}")

        logger.debug(f"IP location: {coordinate}")
        return LocationFix(coordinate)

    @staticmethod
    def parse_response(payload: Any) -> Optional[Coordinate]:
        """
        "loc": "48.8566,2.3522" 形式のレスポンスを座標に変換

        Returns:
            Optional[Coordinate]: 座標（解析できない場合はNone）
        """
        if not isinstance(payload, dict):
            return None

        loc = payload.get("loc")
        if not isinstance(loc, str) or "," not in loc:
            return None

        latitude, _, longitude = loc.partition(",")
        try:
            coordinate = Coordinate(float(latitude), float(longitude))
        except ValueError:
            return None

        return coordinate if coordinate.is_valid else None
