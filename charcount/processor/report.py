import html
from typing import Any

from charcount.processor.models import DocumentAnalysis, UnitResult


class ReportBuilder:
    """Turns a DocumentAnalysis into a JSON payload or a text summary."""

    def build(self, analysis: DocumentAnalysis) -> dict[str, Any]:
        """Return a JSON-serializable summary.

        Recognized text is included both raw and HTML-escaped, the latter for
        embedding in markup.
        """
        return {
            "file_name": analysis.file_name,
            "kind": analysis.kind,
            "section_title": analysis.section_title,
            "include_whitespace": analysis.include_whitespace,
            "totals": {
                "native_chars": analysis.total_native_chars,
                "recognized_chars": analysis.total_recognized_chars,
                "total_chars": analysis.total_chars,
                "whitespace": analysis.total_whitespace,
                "images": analysis.total_images,
                "reported_total": analysis.reported_total,
            },
            "units": [self._unit_to_dict(unit) for unit in analysis.units],
        }

    def render_text(self, analysis: DocumentAnalysis, show_text: bool = False) -> str:
        lines = [
            f"File: {analysis.file_name} ({analysis.kind})",
            f"Text characters:  {analysis.total_native_chars:>10,}",
            f"Image characters: {analysis.total_recognized_chars:>10,}",
            f"Total characters: {analysis.total_chars:>10,}",
        ]
        if analysis.include_whitespace:
            lines.append(f"Whitespace:       {analysis.total_whitespace:>10,}")
            lines.append(f"Reported total:   {analysis.reported_total:>10,}")
        lines.append("")
        lines.append(analysis.section_title)
        for unit in analysis.units:
            lines.append(
                f"  {unit.label}: {unit.total_char_count:,} "
                f"(text {unit.native_char_count:,}, images {unit.recognized_char_count:,}, "
                f"{unit.image_count} image(s))"
            )
            if show_text and unit.recognized_text:
                lines.extend(f"    | {line}" for line in unit.recognized_text.splitlines())
        return "\n".join(lines)

    def _unit_to_dict(self, unit: UnitResult) -> dict[str, Any]:
        return {
            "label": unit.label,
            "native_char_count": unit.native_char_count,
            "recognized_char_count": unit.recognized_char_count,
            "total_char_count": unit.total_char_count,
            "image_count": unit.image_count,
            "whitespace_count": unit.whitespace_count,
            "recognized_text": unit.recognized_text,
            "recognized_text_html": html.escape(unit.recognized_text),
        }
