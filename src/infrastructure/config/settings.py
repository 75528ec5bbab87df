"""アプリケーション設定（Pydantic Settings）"""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="arrondissement-locator",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Geocoding
    geocoder_backend: Literal["nominatim", "google"] = Field(
        default="nominatim",
        description="逆ジオコーディングのバックエンド",
    )
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key（geocoder_backend=google の場合は必須）",
    )
    geocoding_language: str = Field(
        default="fr",
        description="逆ジオコーディング結果の言語",
    )
    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/reverse",
        description="Nominatim reverse エンドポイント",
    )
    nominatim_rate_limit: float = Field(
        default=1.0,
        description="Nominatimのレート制限（リクエスト/秒）",
    )

    # Location
    ip_location_url: str = Field(
        default="https://ipinfo.io/json",
        description="IP位置情報エンドポイント（locフィールドを返すもの）",
    )
    location_max_age_ms: int = Field(
        default=30_000,
        description="キャッシュ済み位置情報を新鮮とみなす最大経過時間（ミリ秒）",
    )
    location_interval_ms: int = Field(
        default=1000,
        description="位置更新の間隔（ミリ秒）",
    )
    location_min_update_interval_ms: int = Field(
        default=500,
        description="位置更新の最小間隔（ミリ秒）",
    )
    location_max_update_delay_ms: int = Field(
        default=2000,
        description="位置更新の最大遅延（ミリ秒）",
    )
    location_high_accuracy: bool = Field(
        default=True,
        description="高精度の位置情報を要求するか",
    )

    # HTTP
    http_timeout: int = Field(
        default=10,
        description="HTTPリクエストのタイムアウト（秒）",
    )
    http_retry: int = Field(
        default=3,
        description="HTTPリクエストのリトライ回数",
    )
    http_user_agent: str = Field(
        default="arrondissement-locator/1.0",
        description="HTTPリクエストのUser-Agent",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCPプロジェクトID（Cloud Logging用）",
    )

    # HTTP API
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )
