"""OpenStreetMap Nominatim 逆ジオコーディング実装"""
import asyncio
from typing import Any, Optional

from ..domain.models import Address, Coordinate
from .base import ReverseGeocoder
from ....shared.exceptions.errors import GeocodingError, HTTPError
from ....shared.http.client import HTTPClient
from ....shared.http.rate_limiter import RateLimiter
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text

logger = get_logger(__name__)

DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"


class NominatimGeocoder(ReverseGeocoder):
    """
    Nominatim /reverse エンドポイントを使った逆ジオコーダー

    利用規約により1リクエスト/秒までに制限される
    """

    def __init__(
        self,
        http_client: HTTPClient,
        url: str = DEFAULT_NOMINATIM_URL,
        language: str = "fr",
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント
            url: reverseエンドポイントのURL
            language: 結果の言語（Accept-Language）
            rate_limiter: レート制限（Noneの場合は1リクエスト/秒）
        """
        self.http_client = http_client
        self.url = url
        self.language = language
        self.rate_limiter = rate_limiter or RateLimiter(requests_per_second=1.0)

        logger.info(f"NominatimGeocoder initialized: url={url}")

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[Address]:
        """
        座標から住所を取得（逆ジオコーディング）

        Raises:
            GeocodingError: リクエストに失敗した場合
        """
        if not Coordinate(latitude, longitude).is_valid:
            logger.warning(f"Invalid coordinates for reverse geocoding: ({latitude}, {longitude})")
            return None

        return await asyncio.to_thread(self._reverse_geocode_sync, latitude, longitude)

    def _reverse_geocode_sync(
        self, latitude: float, longitude: float
    ) -> Optional[Address]:
        logger.debug(f"Reverse geocoding via Nominatim: ({latitude}, {longitude})")

        self.rate_limiter.wait()

        try:
            payload = self.http_client.get_json(
                self.url,
                params={
                    "format": "jsonv2",
                    "lat": latitude,
                    "lon": longitude,
                    "addressdetails": 1,
                    "accept-language": self.language,
                },
            )
        except HTTPError as e:
            raise GeocodingError(f"Nominatim request failed: {e}") from e

        address = self.parse_response(payload)

        if address is None:
            logger.warning(f"No reverse geocoding results for: ({latitude}, {longitude})")
        else:
            logger.debug(
                f"Reverse geocoded: ({latitude}, {longitude}) -> {address.formatted_address}"
            )

        return address

    @staticmethod
    def parse_response(payload: Any) -> Optional[Address]:
        """
        Nominatimのレスポンスを住所に変換

        Args:
            payload: デコード済みJSON

        Returns:
            Optional[Address]: 住所（該当なし・エラー応答の場合はNone）
        """
        if not isinstance(payload, dict) or "error" in payload:
            return None

        details = payload.get("address") or {}

        # 市区町村は粒度の細かい順に探す
        locality = None
        for key in ("city", "town", "village", "municipality"):
            if details.get(key):
                locality = details[key]
                break

        return Address(
            postal_code=normalize_text(details.get("postcode")),
            formatted_address=normalize_text(payload.get("display_name")),
            locality=locality,
            country_code=details.get("country_code"),
        )
