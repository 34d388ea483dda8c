"""
文字位置ベースの簡易類似度
"""


def calculate_similarity(str1: str, str2: str) -> float:
    """
    2つの文字列の位置一致率を計算

    同じ位置にある文字が一致した数を、長い方の文字列長で割る。
    編集距離ではないため、1文字ずれただけでも一致率は大きく下がる。

    Args:
        str1: 比較対象1
        str2: 比較対象2

    Returns:
        0.0〜1.0の一致率（両方空文字の場合は1.0）
    """
    max_len = max(len(str1), len(str2))
    if max_len == 0:
        return 1.0

    matches = sum(1 for a, b in zip(str1, str2) if a == b)
    return matches / max_len
