import zipfile
from xml.etree import ElementTree as ET

from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit
from charcount.extractors.ooxml import media_images, open_package, read_xml, sorted_parts
from charcount.logging.logger import Log

SHEETML_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"


def _tag(name: str) -> str:
    return f"{{{SHEETML_NS}}}{name}"


class XlsxExtractor(BaseUnitExtractor):
    """One unit per worksheet; images in ``xl/media`` form an extra unit.

    Cell text comes from shared strings, inline strings and plain numeric
    values. Booleans, errors and cached formula strings are not counted.
    """

    kind = "xlsx"
    section_title = "Per-sheet details"

    SHEET_PATTERN = r"^xl/worksheets/sheet(\d+)\.xml$"
    MEDIA_FOLDER = "xl/media/"

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        units: list[ExtractedUnit] = []
        with open_package(data) as package:
            shared = self._shared_strings(package)
            names = self._sheet_names(package)
            for index, part in enumerate(sorted_parts(package, self.SHEET_PATTERN)):
                root = read_xml(package, part)
                label = names[index] if index < len(names) and names[index] else f"Sheet {index + 1}"
                text = self._sheet_text(root, shared) if root is not None else ""
                units.append(ExtractedUnit(label=label, native_text=text))
            images = media_images(package, self.MEDIA_FOLDER)
        if images:
            units.append(ExtractedUnit(label="Text in images", images=images, optional=True))
        Log.info(f"Extracted {len(units)} XLSX units ({len(images)} images)")
        return units

    @staticmethod
    def _shared_strings(package: zipfile.ZipFile) -> list[str]:
        root = read_xml(package, "xl/sharedStrings.xml")
        if root is None:
            return []
        return [
            "".join(t.text or "" for t in si.iter(_tag("t")))
            for si in root.iter(_tag("si"))
        ]

    @staticmethod
    def _sheet_names(package: zipfile.ZipFile) -> list[str]:
        root = read_xml(package, "xl/workbook.xml")
        if root is None:
            return []
        return [sheet.get("name", "") for sheet in root.iter(_tag("sheet"))]

    @staticmethod
    def _sheet_text(root: ET.Element, shared: list[str]) -> str:
        texts: list[str] = []
        for cell in root.iter(_tag("c")):
            cell_type = cell.get("t")
            value = cell.find(_tag("v"))
            if cell_type == "inlineStr":
                inline = "".join(t.text or "" for t in cell.iter(_tag("t")))
                if inline:
                    texts.append(inline)
            elif value is None or value.text is None:
                continue
            elif cell_type == "s":
                try:
                    text = shared[int(value.text)]
                except (ValueError, IndexError):
                    continue
                if text:
                    texts.append(text)
            elif cell_type in (None, "n"):
                texts.append(value.text)
        return " ".join(texts)
