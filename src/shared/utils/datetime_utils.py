"""日時関連ユーティリティ"""

from datetime import datetime, timezone

import pytz

# パリ時間のタイムゾーン
PARIS = pytz.timezone("Europe/Paris")


def now_utc() -> datetime:
    """現在のUTC時間を取得"""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    datetimeをUTCに変換

    Args:
        dt: 変換対象のdatetime

    Returns:
        UTCのdatetime
    """
    if dt.tzinfo is None:
        # タイムゾーン情報がない場合はUTCとして扱う
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def to_paris(dt: datetime) -> datetime:
    """
    datetimeをパリ時間に変換

    Args:
        dt: 変換対象のdatetime

    Returns:
        パリ時間のdatetime
    """
    return to_utc(dt).astimezone(PARIS)


def elapsed_ms(since: datetime, now: datetime) -> int:
    """sinceからnowまでの経過時間（ミリ秒）"""
    return int((to_utc(now) - to_utc(since)).total_seconds() * 1000)
