"""固定座標を返す位置情報プロバイダー"""

from typing import AsyncGenerator, Optional

from ..domain.models import LocationFix, LocationRequest
from ...geocoding.domain.models import Coordinate
from .base import LocationProvider


class StaticLocationProvider(LocationProvider):
    """
    指定された座標を常に現在地として返すプロバイダー

    CLIで --lat/--lon が指定された場合に使用する
    """

    def __init__(self, coordinate: Coordinate) -> None:
        self.coordinate = coordinate

    async def get_last_known_location(self) -> Optional[LocationFix]:
        return LocationFix(self.coordinate)

    async def subscribe_to_location_updates(
        self, request: LocationRequest
    ) -> AsyncGenerator[LocationFix, None]:
        yield LocationFix(self.coordinate)
