"""입력 파일 로더: 규칙 섹션 / 메시지 섹션 분리"""

from __future__ import annotations
from pathlib    import Path
from typing     import List, Tuple


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_input_text(path: str) -> str:
    """
    Load Input Text
    """
    return normalize_newlines(Path(path).read_text(encoding="utf-8"))


def split_sections(text: str) -> Tuple[str, List[str]]:
    """
    첫 번째 빈 줄을 기준으로 (규칙 섹션 원문, 메시지 줄 목록)으로 나눈다.
    빈 줄이 없으면 전체가 규칙 섹션이고 메시지는 없다.
    """
    text = normalize_newlines(text)
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.strip() == "":
            rules_text = "\n".join(lines[:i])
            messages = "\n".join(lines[i + 1:]).splitlines()
            return rules_text, messages
    return text, []
