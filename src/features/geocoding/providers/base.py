"""逆ジオコーダーの基底クラス"""

from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import Address


class ReverseGeocoder(ABC):
    """逆ジオコーディングの抽象基底クラス"""

    @abstractmethod
    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[Address]:
        """
        座標から住所を取得（逆ジオコーディング）

        Args:
            latitude: 緯度
            longitude: 経度

        Returns:
            Optional[Address]: 住所（見つからない場合はNone）

        Raises:
            GeocodingError: バックエンドへのリクエストに失敗した場合
        """
        pass
