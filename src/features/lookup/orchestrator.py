"""区検索オーケストレーター"""

from typing import Any, Optional

from ...infrastructure.config.settings import Settings
from ...shared.http.client import HTTPClient
from ...shared.logging.config import get_logger
from ..geocoding.domain.models import Coordinate
from ..geocoding.services.geocoding_service import GeocodingService, create_reverse_geocoder
from ..location.domain.models import LocationRequest
from ..location.providers.base import LocationProvider
from ..location.providers.ip_location_provider import IpLocationProvider
from ..location.providers.static_provider import StaticLocationProvider
from ..location.services.location_service import LocationService
from .domain.state import LookupState
from .services.lookup_service import DistrictLookupService

logger = get_logger(__name__)


class LookupOrchestrator:
    """
    区検索オーケストレーター

    各Featureを統合し、依存性注入を行う
    """

    def __init__(
        self, settings: Settings, coordinate: Optional[Coordinate] = None
    ) -> None:
        """
        Args:
            settings: アプリケーション設定
            coordinate: 固定座標（指定時はIP位置情報を使わない）
        """
        self.settings = settings

        # HTTPクライアントを初期化（Nominatim・IP位置情報で共有）
        self.http_client = HTTPClient(
            timeout=settings.http_timeout,
            max_retries=settings.http_retry,
            user_agent=settings.http_user_agent,
        )

        self.geocoding_service = GeocodingService(
            create_reverse_geocoder(settings, http_client=self.http_client)
        )

        self.location_service = LocationService(
            provider=self._create_location_provider(coordinate),
            request=LocationRequest(
                interval_ms=settings.location_interval_ms,
                min_update_interval_ms=settings.location_min_update_interval_ms,
                max_update_delay_ms=settings.location_max_update_delay_ms,
                high_accuracy=settings.location_high_accuracy,
            ),
            max_age_ms=settings.location_max_age_ms,
        )

        self.lookup_service = DistrictLookupService(
            location_service=self.location_service,
            geocoding_service=self.geocoding_service,
        )

        logger.info("LookupOrchestrator initialized")

    def _create_location_provider(
        self, coordinate: Optional[Coordinate]
    ) -> LocationProvider:
        if coordinate is not None:
            logger.info(f"Using static location: {coordinate}")
            return StaticLocationProvider(coordinate)

        return IpLocationProvider(self.http_client, url=self.settings.ip_location_url)

    async def run_lookup(self) -> LookupState:
        """現在地の区検索を実行"""
        logger.info("Starting district lookup")

        state = await self.lookup_service.refresh()

        logger.info(f"District lookup completed: {state}")
        return state

    def close(self) -> None:
        """リソースを解放"""
        self.http_client.close()

    def __enter__(self) -> "LookupOrchestrator":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
