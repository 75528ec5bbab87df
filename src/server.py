"""HTTP APIサーバー（FastAPI）"""
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .features.district.domain.resolver import is_known_arrondissement, resolve_district
from .features.geocoding.domain.models import Coordinate
from .features.geocoding.services.geocoding_service import GeocodingService, create_reverse_geocoder
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(
    level=settings.log_level,
    enable_cloud_logging=settings.gcp_logging_enabled,
    project_id=settings.gcp_project_id,
)
logger = get_logger(__name__)

app = FastAPI(
    title="Arrondissement Locator",
    description="座標または郵便番号からパリの区番号を求めるAPI",
    version="1.0.0",
)


@lru_cache(maxsize=1)
def get_geocoding_service() -> GeocodingService:
    """ジオコーディングサービスを取得（初回のみ作成）"""
    return GeocodingService(create_reverse_geocoder(settings))


@app.on_event("startup")
async def startup_event() -> None:
    """起動時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Geocoder backend: {settings.geocoder_backend}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """シャットダウン時の処理"""
    logger.info("Application shutting down")


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": settings.project_name,
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/districts/{postal_code}")
async def district_for_postal_code(postal_code: str) -> dict[str, Any]:
    """
    郵便番号から区番号を求める

    パリ以外の郵便番号でも404にはせず、district_numberをnullで返す
    """
    district = resolve_district(postal_code)
    return {
        "postal_code": postal_code,
        "district_number": district,
        "is_known_arrondissement": is_known_arrondissement(district),
    }


@app.get("/lookup")
async def lookup(
    lat: float = Query(..., ge=-90.0, le=90.0, description="緯度"),
    lon: float = Query(..., ge=-180.0, le=180.0, description="経度"),
    geocoding_service: GeocodingService = Depends(get_geocoding_service),
) -> dict[str, Any]:
    """
    座標を逆ジオコーディングし、郵便番号と区番号を返す

    Args:
        lat: 緯度
        lon: 経度

    Returns:
        dict[str, Any]: レスポンス
    """
    coordinate = Coordinate(lat, lon)
    logger.info(f"Received lookup request for {coordinate}")

    address = await geocoding_service.resolve_address(coordinate)
    postal_code = address.postal_code if address else None
    district = resolve_district(postal_code)

    return {
        "latitude": lat,
        "longitude": lon,
        "postal_code": postal_code,
        "formatted_address": address.formatted_address if address else None,
        "district_number": district,
        "is_known_arrondissement": is_known_arrondissement(district),
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "detail": str(exc)},
    )


def run() -> None:
    """uvicornでサーバーを起動"""
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
