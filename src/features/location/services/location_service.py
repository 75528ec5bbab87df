"""位置情報取得サービス"""

from typing import Optional

from ..domain.models import LocationRequest
from ..providers.base import LocationProvider
from ...geocoding.domain.models import Coordinate
from ....shared.exceptions.errors import (
    LocationError,
    LocationPermissionError,
    LocationUnavailableError,
)
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

# キャッシュ済み位置を新鮮とみなす最大経過時間（ミリ秒）
DEFAULT_MAX_AGE_MS = 30_000


class LocationService:
    """
    位置情報取得サービス

    新しいキャッシュ済み位置があればそれを使い、
    なければ位置更新を購読して最初の1件を取得する
    """

    def __init__(
        self,
        provider: LocationProvider,
        request: Optional[LocationRequest] = None,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
    ) -> None:
        """
        Args:
            provider: 位置情報プロバイダー
            request: 位置更新の購読条件
            max_age_ms: キャッシュ済み位置の許容経過時間（ミリ秒）
        """
        self.provider = provider
        self.request = request or LocationRequest()
        self.max_age_ms = max_age_ms

        logger.info(
            f"LocationService initialized: provider={type(provider).__name__}, "
            f"max_age={max_age_ms}ms"
        )

    async def acquire(self) -> Coordinate:
        """
        現在地を取得

        Returns:
            Coordinate: 現在地

        Raises:
            LocationPermissionError: 位置情報の権限がない場合
            LocationUnavailableError: 位置を取得できなかった場合
        """
        try:
            fix = await self.provider.get_last_known_location()
        except LocationPermissionError:
            raise
        except LocationError as e:
            logger.warning(f"Failed to get last known location: {e}, requesting current")
            fix = None

        if fix is not None:
            age_ms = fix.age_ms()
            if age_ms < self.max_age_ms:
                logger.info(f"Using last known location: {fix.coordinate}, age={age_ms // 1000}s")
                return fix.coordinate

        logger.info("Last known location is null or stale, requesting current location")
        return await self._request_current_location()

    async def _request_current_location(self) -> Coordinate:
        """位置更新を購読し、最初の1件を受け取ったら購読を解除する"""
        updates = self.provider.subscribe_to_location_updates(self.request)
        try:
            async for fix in updates:
                logger.info(f"Fresh location: {fix.coordinate}")
                return fix.coordinate
        finally:
            await updates.aclose()

        raise LocationUnavailableError("Location update stream ended without a fix")
