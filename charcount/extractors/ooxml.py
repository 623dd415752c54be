"""Shared helpers for zip-based Office Open XML packages."""

import re
import zipfile
import zlib
from io import BytesIO
from pathlib import PurePosixPath
from xml.etree import ElementTree as ET

from charcount.imaging.models import IMAGE_EXTENSIONS, RawImage, mime_type_for
from charcount.processor.exceptions import DocumentParseError


def open_package(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(BytesIO(data))
    except (zipfile.BadZipFile, OSError) as exc:
        raise DocumentParseError(f"Not a valid Office Open XML package: {exc}") from exc


def read_part(package: zipfile.ZipFile, part_name: str) -> bytes:
    """Read a part's bytes; a missing part raises KeyError."""
    try:
        return package.read(part_name)
    except (zipfile.BadZipFile, zlib.error, OSError) as exc:
        raise DocumentParseError(f"Corrupt package part {part_name}: {exc}") from exc


def read_xml(package: zipfile.ZipFile, part_name: str) -> ET.Element | None:
    """Parse a package part, returning None when it does not exist."""
    try:
        raw = read_part(package, part_name)
    except KeyError:
        return None
    try:
        return ET.fromstring(raw)
    except ET.ParseError as exc:
        raise DocumentParseError(f"Malformed XML in {part_name}: {exc}") from exc


def sorted_parts(package: zipfile.ZipFile, pattern: str) -> list[str]:
    """Return part names matching *pattern* ordered by its first numeric group."""
    regex = re.compile(pattern)
    numbered: list[tuple[int, str]] = []
    for name in package.namelist():
        match = regex.search(name)
        if match:
            numbered.append((int(match.group(1)), name))
    return [name for _, name in sorted(numbered)]


def media_images(package: zipfile.ZipFile, media_folder: str) -> list[RawImage]:
    """Return every supported raster image stored under *media_folder*."""
    images: list[RawImage] = []
    for name in sorted(package.namelist()):
        if not name.startswith(media_folder) or name.endswith("/"):
            continue
        ext = PurePosixPath(name).suffix.lower().lstrip(".")
        if ext in IMAGE_EXTENSIONS:
            images.append(
                RawImage(
                    name=name[len(media_folder):],
                    data=read_part(package, name),
                    mime_type=mime_type_for(ext),
                )
            )
    return images


def paragraph_text(root: ET.Element, ns: str) -> str:
    """Concatenate ``t`` runs per ``p`` paragraph, one paragraph per line.

    Runs belong to their innermost paragraph, so paragraphs nested in text
    boxes are not counted twice.
    """
    p_tag, t_tag = f"{{{ns}}}p", f"{{{ns}}}t"
    lines: list[str] = []

    def walk(node: ET.Element, runs: list[str]) -> None:
        for child in node:
            if child.tag == p_tag:
                inner: list[str] = []
                walk(child, inner)
                if any(inner):
                    lines.append("".join(inner))
            elif child.tag == t_tag:
                runs.append(child.text or "")
            else:
                walk(child, runs)

    loose: list[str] = []
    walk(root, loose)
    if any(loose):
        lines.append("".join(loose))
    return "\n".join(lines)
