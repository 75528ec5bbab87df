"""カスタム例外定義"""


class ArrondissementError(Exception):
    """アプリケーション基底例外"""

    pass


class HTTPError(ArrondissementError):
    """HTTP関連のエラー"""

    pass


class GeocodingError(ArrondissementError):
    """逆ジオコーディングエラー"""

    pass


class LocationError(ArrondissementError):
    """位置情報取得エラー"""

    pass


class LocationUnavailableError(LocationError):
    """位置情報が取得できない"""

    pass


class LocationPermissionError(LocationError):
    """位置情報の権限がない"""

    pass


class ConfigurationError(ArrondissementError):
    """設定エラー"""

    pass
