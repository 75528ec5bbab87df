"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    """地理座標（WGS-84、度）"""

    latitude: float  # 緯度
    longitude: float  # 経度

    def __repr__(self) -> str:
        return f"Coordinate(lat={self.latitude}, lng={self.longitude})"

    @property
    def is_valid(self) -> bool:
        """緯度・経度が有効な範囲内か"""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True)
class Address:
    """逆ジオコーディング結果の住所"""

    postal_code: Optional[str] = None  # 郵便番号
    formatted_address: Optional[str] = None  # 正規化された住所
    locality: Optional[str] = None  # 市区町村
    country_code: Optional[str] = None  # ISO 3166-1 alpha-2（小文字）
