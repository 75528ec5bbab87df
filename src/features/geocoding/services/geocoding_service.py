"""ジオコーディングサービス"""

from typing import Optional

from ..domain.models import Address, Coordinate
from ..providers.base import ReverseGeocoder
from ..providers.google_maps_geocoder import GoogleMapsGeocoder
from ..providers.nominatim_geocoder import NominatimGeocoder
from ....infrastructure.config.settings import Settings
from ....shared.exceptions.errors import ConfigurationError, GeocodingError
from ....shared.http.client import HTTPClient
from ....shared.http.rate_limiter import RateLimiter
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class GeocodingService:
    """
    ジオコーディングサービス

    バックエンドの失敗は「住所なし」として扱い、呼び出し側には伝播させない
    """

    def __init__(self, geocoder: ReverseGeocoder) -> None:
        """
        Args:
            geocoder: 逆ジオコーダー
        """
        self.geocoder = geocoder

        logger.info(f"GeocodingService initialized: backend={type(geocoder).__name__}")

    async def resolve_address(self, coordinate: Coordinate) -> Optional[Address]:
        """
        座標の住所を取得

        Args:
            coordinate: 座標

        Returns:
            Optional[Address]: 住所（見つからない、または失敗した場合はNone）
        """
        try:
            return await self.geocoder.reverse_geocode(
                coordinate.latitude, coordinate.longitude
            )
        except GeocodingError as e:
            logger.error(f"Geocoding error for {coordinate}: {e}")
            return None


def create_reverse_geocoder(
    settings: Settings, http_client: Optional[HTTPClient] = None
) -> ReverseGeocoder:
    """
    設定に応じた逆ジオコーダーを作成

    Args:
        settings: アプリケーション設定
        http_client: Nominatim用HTTPクライアント（Noneの場合は設定から作成）

    Returns:
        ReverseGeocoder: 逆ジオコーダー

    Raises:
        ConfigurationError: Googleバックエンドに API キーが設定されていない場合
    """
    if settings.geocoder_backend == "google":
        if not settings.google_maps_api_key:
            raise ConfigurationError(
                "GOOGLE_MAPS_API_KEY is required when GEOCODER_BACKEND=google"
            )
        return GoogleMapsGeocoder(
            api_key=settings.google_maps_api_key,
            language=settings.geocoding_language,
        )

    if http_client is None:
        http_client = HTTPClient(
            timeout=settings.http_timeout,
            max_retries=settings.http_retry,
            user_agent=settings.http_user_agent,
        )

    return NominatimGeocoder(
        http_client=http_client,
        url=settings.nominatim_url,
        language=settings.geocoding_language,
        rate_limiter=RateLimiter(requests_per_second=settings.nominatim_rate_limit),
    )
