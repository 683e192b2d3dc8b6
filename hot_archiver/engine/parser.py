"""Extract hot topics from the board markup."""

from __future__ import annotations

from selectolax.parser import HTMLParser

from ..config import CrawlerConfig
from ..records import HotItem


class HotBoardParser:
    """Turn the board page into (title, summary) pairs in page order."""

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config

    def parse(self, html: str) -> list[HotItem]:
        parser = HTMLParser(html)
        items: list[HotItem] = []
        for node in parser.css(self.config.item_selector):
            title_node = node.css_first(self.config.title_selector)
            summary_node = node.css_first(self.config.summary_selector)
            # 标题或摘要缺失的条目直接跳过
            if title_node is None or summary_node is None:
                continue
            items.append(HotItem(title=self._clean(title_node), summary=self._clean(summary_node)))
        return items

    @staticmethod
    def _clean(node) -> str:
        return node.text(deep=True).replace("\n", "").strip()


__all__ = ["HotBoardParser"]
