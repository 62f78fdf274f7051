from __future__ import annotations

from pathlib import Path

from cdn_asset_finder.extract import Asset
from cdn_asset_finder.report import to_markdown_table, write_report


def _asset(n: int) -> Asset:
    return Asset(repository="ch-service", filepath=f"views/p{n}.html", linenumber=n, line="&lt;script&gt;", name=f"a{n}.js")


def test_empty_table_is_header_and_separator():
    out = to_markdown_table([])
    assert out.split("\n") == [
        "| Repository | File Path | Line Number | Line | Asset Name |",
        "| --- | --- | --- | --- | --- |",
    ]


def test_row_count_is_assets_plus_two():
    assets = [_asset(i) for i in range(1, 4)]
    lines = to_markdown_table(assets).split("\n")
    assert len(lines) == len(assets) + 2
    assert lines[2] == "| ch-service | views/p1.html | 1 | &lt;script&gt; | a1.js |"


def test_write_report_skips_empty(tmp_path: Path):
    out = tmp_path / "identified_assets.md"
    assert write_report([], out) is None
    assert not out.exists()


def test_write_report_writes_utf8(tmp_path: Path):
    out = tmp_path / "reports" / "identified_assets.md"
    written = write_report([_asset(7)], out)
    assert written == out
    assert out.read_text(encoding="utf-8") == to_markdown_table([_asset(7)])
