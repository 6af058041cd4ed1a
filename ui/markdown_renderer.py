# ui/markdown_renderer.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from markdown import markdown


@dataclass(frozen=True)
class MarkdownTheme:
    text: str = "#111827"
    muted: str = "#6B7280"
    border: str = "#E5E7EB"
    panel: str = "#FFFFFF"
    accent: str = "#10B981"


class MarkdownRenderer:
    """
    Convert MD -> full HTML page with inline CSS.

    tkinterweb (tkhtml) only understands a subset of HTML/CSS: no CSS
    variables, no flexbox. Keep the stylesheet to plain selectors.
    """

    EXTENSIONS: List[str] = ["extra", "sane_lists", "tables", "nl2br"]

    def __init__(self, theme: MarkdownTheme | None = None):
        self.theme = theme or MarkdownTheme()

    def css(self) -> str:
        t = self.theme
        return f"""
        body {{
          font-family: -apple-system, "Segoe UI", Roboto, Arial, sans-serif;
          margin: 14px;
          color: {t.text};
          background: {t.panel};
          font-size: 14px;
          line-height: 1.5;
        }}
        h2 {{ font-size: 1.2em; margin: 0 0 0.4em; }}
        p {{ margin: 0.4em 0; }}
        em {{ color: {t.muted}; font-style: normal; }}
        strong {{ color: {t.accent}; }}
        table {{
          border-collapse: collapse;
          width: 100%;
          margin: 0.6em 0;
        }}
        th, td {{
          border-bottom: 1px solid {t.border};
          padding: 6px 8px;
          text-align: left;
        }}
        th {{ color: {t.muted}; font-weight: 600; }}
        """

    def to_html(self, md_text: str) -> str:
        body = markdown(
            md_text or "",
            extensions=self.EXTENSIONS,
            output_format="html5",
        )
        return f"""
        <html>
          <head>
            <meta charset="utf-8"/>
            <style>{self.css()}</style>
          </head>
          <body>{body}</body>
        </html>
        """
