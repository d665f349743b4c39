# backend/nomo/__init__.py
"""
nomo backend application package.

Chat messages (WeChat / Lark) with `#tag` markers are saved as Notion pages.

This package contains:
- main: FastAPI application entrypoint
- memos: tag scanning, page composition and the dispatch pipeline
- bindings: chat user -> Notion database bindings
- notion: Notion API client
- notifications: operational notifications (notify callback)
"""
