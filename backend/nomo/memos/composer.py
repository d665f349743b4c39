# backend/nomo/memos/composer.py

"""
Segment 列と Binding から PageCreateRequest を組み立てる。

I/O は一切行わない純粋な変換なので、リテラルの Segment 列だけでテストできる。
"""

from typing import List, Sequence

from nomo.bindings.schemas import Binding
from nomo.notion.schemas import PageCreateRequest

from .schemas import Segment


def compose(binding: Binding, segments: Sequence[Segment]) -> PageCreateRequest:
    """
    - タグ付き Segment: タグ 1 件 + 本文ブロック 1 件
    - タグなし Segment: 本文ブロック 1 件のみ

    order の順に並べ直してから変換する（scan の出力ならそのままの順）。
    """
    tags: List[str] = []
    blocks: List[str] = []

    for segment in sorted(segments, key=lambda s: s.order):
        if segment.is_tagged:
            tags.append(segment.tag)
        blocks.append(segment.content)

    return PageCreateRequest(
        secret_key=binding.secret_key,
        database_id=binding.database_id,
        tags=tags,
        blocks=blocks,
    )
