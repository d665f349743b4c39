# backend/nomo/memos/scanner.py

"""
`#タグ` 付きテキストを Segment 列に分解するスキャナ。

ルール:
- `#` から次の空白文字 / 次の `#` / 末尾までがタグ名
- タグ名直後の空白文字の連続は区切りとして捨てる（本文には含めない）
- タグから次の `#` または末尾までがそのタグの本文
- 最初の `#` より前のテキストはタグなし（tag=""）の Segment になる
- タグ名が空になる `#`（直後が空白 / 末尾）はただの文字として本文に残す

例:
    scan("#科技 只是一条科技#美食 memo")
    -> [Segment(tag="科技", content="只是一条科技", order=0),
        Segment(tag="美食", content="memo", order=1)]

区切りは空白文字のみ。句読点（`#标签，内容` など）は区切りとみなさない。
"""

from typing import List, Optional

from .schemas import Segment

TAG_MARKER = "#"


def _read_tag_name(text: str, start: int) -> int:
    """
    text[start:] からタグ名を読み、タグ名の直後の位置を返す。
    """
    end = start
    while end < len(text) and not text[end].isspace() and text[end] != TAG_MARKER:
        end += 1
    return end


def _skip_whitespace(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end].isspace():
        end += 1
    return end


def _flush(
    segments: List[Segment],
    tag: Optional[str],
    pending: List[str],
) -> None:
    """
    溜めている本文を Segment にして segments に追加する。

    タグなしの場合は本文が空なら何もしない。
    タグ付きの場合は本文が空でも追加する（`#A #B text` の A など）。
    """
    content = "".join(pending)
    if tag is None and not content:
        return
    segments.append(Segment(tag=tag or "", content=content, order=len(segments)))


def scan(raw_text: str) -> List[Segment]:
    """
    raw_text を左から走査して Segment のリストを返す。

    空文字列の場合は空リスト。例外は投げない。
    """
    segments: List[Segment] = []
    pending: List[str] = []
    current_tag: Optional[str] = None

    pos = 0
    while pos < len(raw_text):
        char = raw_text[pos]

        if char != TAG_MARKER:
            pending.append(char)
            pos += 1
            continue

        name_end = _read_tag_name(raw_text, pos + 1)
        tag_name = raw_text[pos + 1 : name_end]
        if not tag_name:
            # `# ` や末尾の `#` はタグにならない。
            # 「`#` の直後が末尾なら本文が空の Segment」は、タグ名が 1 文字以上ある
            # `#tag` が末尾に来た場合（`记录一下#待办`）として扱い、裸の `#` は文字のまま残す
            pending.append(char)
            pos += 1
            continue

        _flush(segments, current_tag, pending)
        current_tag = tag_name
        pending = []
        pos = _skip_whitespace(raw_text, name_end)

    _flush(segments, current_tag, pending)
    return segments
