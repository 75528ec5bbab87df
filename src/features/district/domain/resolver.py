"""郵便番号からパリの区（arrondissement）番号を求める"""
from typing import Optional

# パリ県（75）の郵便番号プレフィックス
PARIS_POSTAL_PREFIX = "75"

# 実在する区番号の範囲（1〜20区）
PARIS_ARRONDISSEMENTS = range(1, 21)


def resolve_district(postal_code: Optional[str]) -> Optional[int]:
    """
    郵便番号から区番号を導出

    "75"で始まる郵便番号の末尾2文字を整数として返す。
    範囲チェックは行わないため "75099" は 99 になる
    （is_known_arrondissement で判定できる）。

    Args:
        postal_code: 郵便番号（例: "75001", "75116"）

    Returns:
        Optional[int]: 区番号（パリ以外、または末尾が数字でない場合はNone）
    """
    if postal_code is None:
        return None

    if not postal_code.startswith(PARIS_POSTAL_PREFIX):
        return None

    suffix = postal_code[-2:]

    # 末尾2文字が10進数字であること（符号や全角数字は不可）
    if len(suffix) != 2 or not (suffix.isascii() and suffix.isdigit()):
        return None

    return int(suffix, 10)


def is_known_arrondissement(district: Optional[int]) -> bool:
    """区番号が実在する1〜20区の範囲内か"""
    return district is not None and district in PARIS_ARRONDISSEMENTS
