"""位置情報プロバイダーの基底クラス"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator, Optional

from ..domain.models import LocationFix, LocationRequest


class LocationProvider(ABC):
    """位置情報プロバイダーの抽象基底クラス"""

    @abstractmethod
    async def get_last_known_location(self) -> Optional[LocationFix]:
        """
        最後に取得された位置を返す

        Returns:
            Optional[LocationFix]: キャッシュ済みの位置（ない場合はNone）

        Raises:
            LocationPermissionError: 位置情報の権限がない場合
            LocationError: 取得に失敗した場合
        """
        pass

    @abstractmethod
    def subscribe_to_location_updates(
        self, request: LocationRequest
    ) -> AsyncGenerator[LocationFix, None]:
        """
        位置更新を購読

        返されたイテレーターをacloseするか、消費中のタスクを
        キャンセルすると購読が解除される

        Args:
            request: 購読条件

        Returns:
            AsyncGenerator[LocationFix, None]: 位置更新のストリーム
        """
        pass
