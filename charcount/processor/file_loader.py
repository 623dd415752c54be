from pathlib import Path

from charcount.processor.exceptions import FileReadError


class FileLoader:
    """Reads a document's bytes from the local filesystem."""

    def load(self, path: Path) -> bytes:
        """Read document bytes from disk.

        Raises:
            FileReadError: if the file does not exist or cannot be read.
        """
        if not path.is_file():
            raise FileReadError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc
