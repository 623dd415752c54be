from dataclasses import dataclass, field


@dataclass(frozen=True)
class UnitResult:
    """Counts for one structural unit (slide, page, sheet, body or image)."""

    label: str
    native_char_count: int
    recognized_text: str = ""
    recognized_char_count: int = 0
    image_count: int = 0
    whitespace_count: int = 0

    @property
    def total_char_count(self) -> int:
        return self.native_char_count + self.recognized_char_count


@dataclass(frozen=True)
class DocumentAnalysis:
    """Aggregated result of analyzing one file.

    ``total_chars`` never includes whitespace; ``reported_total`` adds it
    when the run was configured to count whitespace.
    """

    file_name: str
    kind: str
    section_title: str
    units: tuple[UnitResult, ...] = field(default_factory=tuple)
    include_whitespace: bool = False

    @property
    def total_native_chars(self) -> int:
        return sum(unit.native_char_count for unit in self.units)

    @property
    def total_recognized_chars(self) -> int:
        return sum(unit.recognized_char_count for unit in self.units)

    @property
    def total_chars(self) -> int:
        return self.total_native_chars + self.total_recognized_chars

    @property
    def total_whitespace(self) -> int:
        return sum(unit.whitespace_count for unit in self.units)

    @property
    def total_images(self) -> int:
        return sum(unit.image_count for unit in self.units)

    @property
    def reported_total(self) -> int:
        if self.include_whitespace:
            return self.total_chars + self.total_whitespace
        return self.total_chars
