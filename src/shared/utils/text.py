"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    テキストを正規化

    - 前後の空白を除去
    - 連続する空白を1つに
    - ノーブレークスペースを通常のスペースに変換
    """
    if not text:
        return None

    text = text.replace("\u00a0", " ").replace("\u202f", " ")

    # 連続する空白を1つに
    text = re.sub(r"\s+", " ", text)

    # 前後の空白を除去
    text = text.strip()

    return text if text else None
