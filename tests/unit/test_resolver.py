"""郵便番号→区番号の導出テスト"""

import pytest

from src.features.district.domain.resolver import is_known_arrondissement, resolve_district


@pytest.mark.parametrize(
    "postal_code,expected",
    [
        ("75001", 1),
        ("75008", 8),
        ("75010", 10),
        ("75020", 20),
        ("75116", 16),
        ("750", 50),
    ],
)
def test_paris_postal_codes(postal_code: str, expected: int) -> None:
    """パリの郵便番号は末尾2桁が区番号になる"""
    assert resolve_district(postal_code) == expected


@pytest.mark.parametrize("postal_code", ["76000", "92100", "69001", "07500", "13075"])
def test_non_paris_postal_codes(postal_code: str) -> None:
    """75で始まらない郵便番号はNone"""
    assert resolve_district(postal_code) is None


@pytest.mark.parametrize("postal_code", [None, "", "7"])
def test_absent_or_short_input(postal_code) -> None:
    """未指定・空文字・短すぎる入力はNone"""
    assert resolve_district(postal_code) is None


@pytest.mark.parametrize("postal_code", ["7500A", "75XY", "750 1", "75-1", "7501１"])
def test_non_numeric_suffix(postal_code: str) -> None:
    """末尾2文字が数字でなければNone（例外は出さない）"""
    assert resolve_district(postal_code) is None


def test_out_of_range_district_is_not_rejected() -> None:
    """範囲外の区番号もそのまま返す"""
    assert resolve_district("75099") == 99
    assert not is_known_arrondissement(99)


def test_long_postal_code_uses_last_two_digits() -> None:
    """長さに関係なく末尾2桁を使う"""
    assert resolve_district("75000012") == 12


def test_resolver_is_idempotent() -> None:
    """同じ入力には同じ結果を返す"""
    assert resolve_district("75116") == resolve_district("75116") == 16


@pytest.mark.parametrize(
    "district,expected",
    [(1, True), (20, True), (0, False), (21, False), (None, False)],
)
def test_is_known_arrondissement(district, expected: bool) -> None:
    """1〜20区のみ実在する区"""
    assert is_known_arrondissement(district) is expected
