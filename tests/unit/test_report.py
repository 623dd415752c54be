import json

from charcount.processor.models import DocumentAnalysis, UnitResult
from charcount.processor.report import ReportBuilder


def _analysis(include_whitespace: bool = False) -> DocumentAnalysis:
    return DocumentAnalysis(
        file_name="deck.pptx",
        kind="pptx",
        section_title="Per-slide details",
        units=(
            UnitResult("Slide 1", 10, "<b>AB</b> & co", 11, 1, 3),
            UnitResult("Slide 2", 4),
        ),
        include_whitespace=include_whitespace,
    )


class TestReportBuilder:
    def test_build_contains_totals(self) -> None:
        payload = ReportBuilder().build(_analysis())
        assert payload["totals"] == {
            "native_chars": 14,
            "recognized_chars": 11,
            "total_chars": 25,
            "whitespace": 3,
            "images": 1,
            "reported_total": 25,
        }
        json.dumps(payload)

    def test_recognized_text_is_html_escaped(self) -> None:
        unit = ReportBuilder().build(_analysis())["units"][0]
        assert unit["recognized_text"] == "<b>AB</b> & co"
        assert unit["recognized_text_html"] == "&lt;b&gt;AB&lt;/b&gt; &amp; co"

    def test_reported_total_includes_whitespace_when_enabled(self) -> None:
        payload = ReportBuilder().build(_analysis(include_whitespace=True))
        assert payload["totals"]["reported_total"] == 28
        assert payload["totals"]["total_chars"] == 25

    def test_render_text_lists_units(self) -> None:
        text = ReportBuilder().render_text(_analysis(), show_text=True)
        assert "Total characters:" in text
        assert "Per-slide details" in text
        assert "Slide 1: 21 (text 10, images 11, 1 image(s))" in text
        assert "    | <b>AB</b> & co" in text

    def test_render_text_hides_recognized_text_by_default(self) -> None:
        assert "| " not in ReportBuilder().render_text(_analysis())
