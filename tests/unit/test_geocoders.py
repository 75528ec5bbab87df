"""逆ジオコーダー実装のテスト"""

import asyncio
from typing import Any, Optional

import googlemaps
import pytest

from src.features.geocoding.domain.models import Address, Coordinate
from src.features.geocoding.providers.google_maps_geocoder import GoogleMapsGeocoder
from src.features.geocoding.providers.nominatim_geocoder import NominatimGeocoder
from src.features.geocoding.services.geocoding_service import (
    GeocodingService,
    create_reverse_geocoder,
)
from src.infrastructure.config.settings import Settings
from src.shared.exceptions.errors import ConfigurationError, GeocodingError, HTTPError
from src.shared.http.rate_limiter import RateLimiter

NOMINATIM_PAYLOAD = {
    "place_id": 88066702,
    "lat": "48.8616",
    "lon": "2.2893",
    "display_name": "Place du Trocadéro et du 11 Novembre, Paris 16e Arrondissement, Paris, Île-de-France, 75116, France",
    "address": {
        "road": "Place du Trocadéro et du 11 Novembre",
        "suburb": "Paris 16e Arrondissement",
        "city": "Paris",
        "postcode": "75116",
        "country": "France",
        "country_code": "fr",
    },
}

GOOGLE_RESULT = {
    "formatted_address": "1 Rue de Rivoli, 75001 Paris, France",
    "place_id": "ChIJ7cv00DwsDogRAMDACa2m4K8",
    "address_components": [
        {"long_name": "1", "short_name": "1", "types": ["street_number"]},
        {"long_name": "Rue de Rivoli", "short_name": "Rue de Rivoli", "types": ["route"]},
        {"long_name": "Paris", "short_name": "Paris", "types": ["locality", "political"]},
        {"long_name": "France", "short_name": "FR", "types": ["country", "political"]},
        {"long_name": "75001", "short_name": "75001", "types": ["postal_code"]},
    ],
}


class FakeHTTPClient:
    """get_jsonの呼び出しを記録するHTTPクライアント"""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get_json(self, url: str, params: Optional[dict[str, Any]] = None, headers=None) -> Any:
        self.calls.append((url, params or {}))
        if self.error is not None:
            raise self.error
        return self.payload


class FakeGoogleClient:
    """googlemaps.Clientの代わり"""

    def __init__(self, results: Any = None, error: Optional[Exception] = None) -> None:
        self.results = results
        self.error = error
        self.calls: list[tuple[tuple[float, float], Optional[str]]] = []

    def reverse_geocode(self, latlng, language=None):
        self.calls.append((latlng, language))
        if self.error is not None:
            raise self.error
        return self.results


def no_wait() -> RateLimiter:
    return RateLimiter(min_wait=0.0, max_wait=0.0)


# --- Nominatim ---


def test_nominatim_reverse_geocode() -> None:
    """Nominatimの応答から郵便番号を取り出す"""
    http_client = FakeHTTPClient(payload=NOMINATIM_PAYLOAD)
    geocoder = NominatimGeocoder(http_client, url="https://nominatim.test/reverse", rate_limiter=no_wait())

    address = asyncio.run(geocoder.reverse_geocode(48.8616, 2.2893))

    assert address == Address(
        postal_code="75116",
        formatted_address=NOMINATIM_PAYLOAD["display_name"],
        locality="Paris",
        country_code="fr",
    )
    url, params = http_client.calls[0]
    assert url == "https://nominatim.test/reverse"
    assert params["format"] == "jsonv2"
    assert params["lat"] == 48.8616
    assert params["lon"] == 2.2893
    assert params["addressdetails"] == 1


def test_nominatim_unable_to_geocode() -> None:
    """該当なし（error応答）はNone"""
    http_client = FakeHTTPClient(payload={"error": "Unable to geocode"})
    geocoder = NominatimGeocoder(http_client, rate_limiter=no_wait())

    assert asyncio.run(geocoder.reverse_geocode(0.0, 0.0)) is None


def test_nominatim_missing_postcode() -> None:
    """郵便番号がない住所"""
    payload = {"display_name": "Océan Atlantique", "address": {"country_code": "fr"}}
    address = NominatimGeocoder.parse_response(payload)

    assert address is not None
    assert address.postal_code is None
    assert address.locality is None


def test_nominatim_http_error_raises_geocoding_error() -> None:
    """HTTPエラーはGeocodingErrorに変換"""
    http_client = FakeHTTPClient(error=HTTPError("503 Service Unavailable"))
    geocoder = NominatimGeocoder(http_client, rate_limiter=no_wait())

    with pytest.raises(GeocodingError):
        asyncio.run(geocoder.reverse_geocode(48.8616, 2.2893))


def test_nominatim_invalid_coordinates() -> None:
    """範囲外の座標はリクエストせずにNone"""
    http_client = FakeHTTPClient(payload=NOMINATIM_PAYLOAD)
    geocoder = NominatimGeocoder(http_client, rate_limiter=no_wait())

    assert asyncio.run(geocoder.reverse_geocode(95.0, 2.0)) is None
    assert http_client.calls == []


# --- Google Maps ---


def test_google_reverse_geocode() -> None:
    """Google Mapsの結果から郵便番号を取り出す"""
    client = FakeGoogleClient(results=[GOOGLE_RESULT])
    geocoder = GoogleMapsGeocoder(language="fr", client=client)

    address = asyncio.run(geocoder.reverse_geocode(48.8606, 2.3376))

    assert address == Address(
        postal_code="75001",
        formatted_address="1 Rue de Rivoli, 75001 Paris, France",
        locality="Paris",
        country_code="fr",
    )
    assert client.calls == [((48.8606, 2.3376), "fr")]


def test_google_no_results() -> None:
    """結果なしはNone"""
    geocoder = GoogleMapsGeocoder(client=FakeGoogleClient(results=[]))

    assert asyncio.run(geocoder.reverse_geocode(48.8606, 2.3376)) is None


@pytest.mark.parametrize(
    "error",
    [
        googlemaps.exceptions.ApiError("OVER_QUERY_LIMIT"),
        googlemaps.exceptions.TransportError("connection reset"),
        googlemaps.exceptions.Timeout(),
        RuntimeError("boom"),
    ],
)
def test_google_errors_raise_geocoding_error(error: Exception) -> None:
    """APIエラーはGeocodingErrorに変換"""
    geocoder = GoogleMapsGeocoder(client=FakeGoogleClient(error=error))

    with pytest.raises(GeocodingError):
        asyncio.run(geocoder.reverse_geocode(48.8606, 2.3376))


def test_google_client_requires_api_key() -> None:
    """APIキーなしではクライアントを作成できない"""
    with pytest.raises(GeocodingError):
        GoogleMapsGeocoder(api_key=None)


# --- GeocodingService / factory ---


def test_geocoding_service_swallows_errors() -> None:
    """サービスは失敗をNoneとして返す"""
    geocoder = GoogleMapsGeocoder(client=FakeGoogleClient(error=RuntimeError("boom")))
    service = GeocodingService(geocoder)

    assert asyncio.run(service.resolve_address(Coordinate(48.8606, 2.3376))) is None


def test_factory_defaults_to_nominatim() -> None:
    """デフォルトはNominatim"""
    settings = Settings(_env_file=None, geocoder_backend="nominatim")

    geocoder = create_reverse_geocoder(settings, http_client=FakeHTTPClient())

    assert isinstance(geocoder, NominatimGeocoder)
    assert geocoder.url == settings.nominatim_url


def test_factory_google_requires_api_key() -> None:
    """GoogleバックエンドはAPIキー必須"""
    settings = Settings(_env_file=None, geocoder_backend="google", google_maps_api_key=None)

    with pytest.raises(ConfigurationError):
        create_reverse_geocoder(settings)
