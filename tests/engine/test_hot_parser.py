from __future__ import annotations

from hot_archiver.config import CrawlerConfig
from hot_archiver.engine import HotBoardParser
from hot_archiver.records import HotItem

BOARD_HTML = """
<html><body>
<div class="container">
  <div class="content_1YWBm">
    <a><div class="c-single-text-ellipsis">  Topic one  </div></a>
    <div class="hot-desc_1m_jR small_Uvkd3 ellipsis_DupbZ">
      First summary
    </div>
  </div>
  <div class="content_1YWBm">
    <a><div class="c-single-text-ellipsis">Topic two</div></a>
    <div class="small_Uvkd3"></div>
  </div>
  <div class="content_1YWBm">
    <div class="c-single-text-ellipsis">No summary node</div>
  </div>
  <div class="content_1YWBm extra">
    <div class="c-single-text-ellipsis">Wrong wrapper class</div>
    <div class="small_Uvkd3">skipped</div>
  </div>
</div>
</body></html>
"""


def test_parse_board_items_in_order() -> None:
    items = HotBoardParser(CrawlerConfig()).parse(BOARD_HTML)
    assert items == [
        HotItem("Topic one", "First summary"),
        HotItem("Topic two", ""),
    ]


def test_parsed_text_has_no_newlines() -> None:
    html = (
        '<div class="content_1YWBm"><div class="c-single-text-ellipsis">multi\nline</div>'
        '<div class="small_Uvkd3">a\nb</div></div>'
    )
    (item,) = HotBoardParser(CrawlerConfig()).parse(html)
    assert "\n" not in item.title and "\n" not in item.summary
    assert item.title == "multiline"


def test_custom_selectors() -> None:
    config = CrawlerConfig(item_selector="li.hot", title_selector="h3", summary_selector="p")
    html = "<ul><li class='hot'><h3>Alpha</h3><p>first</p></li><li class='hot'><h3>Beta</h3><p>second</p></li></ul>"
    items = HotBoardParser(config).parse(html)
    assert [item.title for item in items] == ["Alpha", "Beta"]


def test_unrelated_page_yields_nothing() -> None:
    assert HotBoardParser(CrawlerConfig()).parse("<html><body><p>maintenance</p></body></html>") == []
