from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit


class TextExtractor(BaseUnitExtractor):
    """Plain text: the whole file is one unit, decoded as UTF-8."""

    kind = "txt"
    section_title = "Text file details"

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        # utf-8-sig drops a leading byte-order mark so it is not counted.
        text = data.decode("utf-8-sig", errors="replace")
        return [ExtractedUnit(label="Body", native_text=text)]
