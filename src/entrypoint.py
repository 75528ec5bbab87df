"""CLIエントリーポイント"""
import argparse
import asyncio
import json
import sys
from typing import Any, Optional

from .features.district.domain.resolver import is_known_arrondissement, resolve_district
from .features.geocoding.domain.models import Coordinate
from .features.lookup.orchestrator import LookupOrchestrator
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging
from .shared.utils.datetime_utils import now_utc, to_paris

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        description="現在地（または指定座標）からパリの区番号を求めるツール"
    )

    parser.add_argument("--lat", type=float, help="緯度（--lonと併用）")
    parser.add_argument("--lon", type=float, help="経度（--latと併用）")

    parser.add_argument(
        "--postal-code",
        type=str,
        help="郵便番号から区番号のみを求める（ネットワーク不要）",
    )

    parser.add_argument(
        "--geocoder",
        type=str,
        choices=["nominatim", "google"],
        help="逆ジオコーディングのバックエンド（設定値を上書き）",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level
        if args.geocoder:
            settings.geocoder_backend = args.geocoder

        setup_logging(
            level=settings.log_level,
            enable_cloud_logging=settings.gcp_logging_enabled,
            project_id=settings.gcp_project_id,
            force=True,
        )

        logger.info("Starting arrondissement locator")
        logger.info(f"Environment: {settings.environment}")

        if args.postal_code is not None:
            district = resolve_district(args.postal_code)
            result: dict[str, Any] = {
                "postal_code": args.postal_code,
                "district_number": district,
                "is_known_arrondissement": is_known_arrondissement(district),
            }
        else:
            coordinate = None
            if args.lat is not None:
                coordinate = Coordinate(args.lat, args.lon)

            with LookupOrchestrator(settings, coordinate=coordinate) as orchestrator:
                state = asyncio.run(orchestrator.run_lookup())

            result = state.to_dict()

        result["resolved_at"] = to_paris(now_utc()).isoformat()
        print(json.dumps(result, ensure_ascii=False))

        logger.info("Arrondissement locator completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
