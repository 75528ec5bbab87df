"""Google Maps Geocoding API実装"""
import asyncio
from typing import Any, Optional

import googlemaps

from ..domain.models import Address, Coordinate
from .base import ReverseGeocoder
from ....shared.exceptions.errors import GeocodingError
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text

logger = get_logger(__name__)


class GoogleMapsGeocoder(ReverseGeocoder):
    """Google Maps Reverse Geocoding API実装"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        language: str = "fr",
        client: Any = None,
    ) -> None:
        """
        Args:
            api_key: Google Maps API キー
            language: 結果の言語
            client: 生成済みのクライアント（テスト用。指定時はapi_keyを無視）
        """
        self.language = language

        if client is not None:
            self.client = client
        else:
            try:
                self.client = googlemaps.Client(key=api_key)
            except Exception as e:
                raise GeocodingError(f"Failed to initialize Google Maps client: {e}") from e

        logger.info("GoogleMapsGeocoder initialized")

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[Address]:
        """
        座標から住所を取得（逆ジオコーディング）

        Raises:
            GeocodingError: APIリクエストに失敗した場合
        """
        if not Coordinate(latitude, longitude).is_valid:
            logger.warning(f"Invalid coordinates for reverse geocoding: ({latitude}, {longitude})")
            return None

        return await asyncio.to_thread(self._reverse_geocode_sync, latitude, longitude)

    def _reverse_geocode_sync(
        self, latitude: float, longitude: float
    ) -> Optional[Address]:
        try:
            logger.debug(f"Reverse geocoding: ({latitude}, {longitude})")

            results = self.client.reverse_geocode(
                (latitude, longitude), language=self.language
            )

            if not results:
                logger.warning(
                    f"No reverse geocoding results for: ({latitude}, {longitude})"
                )
                return None

            # 最初の結果を使用
            address = self.parse_result(results[0])

            logger.debug(
                f"Reverse geocoded: ({latitude}, {longitude}) -> {address.formatted_address}"
            )

            return address

        except googlemaps.exceptions.ApiError as e:
            raise GeocodingError(f"Google Maps API error: {e}") from e
        except googlemaps.exceptions.TransportError as e:
            raise GeocodingError(f"Google Maps transport error: {e}") from e
        except googlemaps.exceptions.Timeout as e:
            raise GeocodingError(f"Google Maps timeout: {e}") from e
        except Exception as e:
            raise GeocodingError(
                f"Unexpected error during reverse geocoding: {e}"
            ) from e

    @staticmethod
    def parse_result(result: dict[str, Any]) -> Address:
        """
        Geocoding APIの結果1件を住所に変換

        Args:
            result: APIレスポンスのresults要素

        Returns:
            Address: 住所
        """
        components: dict[str, dict[str, Any]] = {}
        for component in result.get("address_components", []):
            for component_type in component.get("types", []):
                # 同じtypeが複数ある場合は最初のものを優先
                components.setdefault(component_type, component)

        postal_code = components.get("postal_code", {}).get("long_name")
        locality = components.get("locality", {}).get("long_name")
        country = components.get("country", {}).get("short_name")

        return Address(
            postal_code=normalize_text(postal_code),
            formatted_address=normalize_text(result.get("formatted_address")),
            locality=locality,
            country_code=country.lower() if country else None,
        )
