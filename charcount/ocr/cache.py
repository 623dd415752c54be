class RecognitionCache:
    """Run-scoped mapping of image fingerprint to recognized text.

    Entries are only ever added; a fingerprint is recognized at most once per
    document run and every later lookup returns the same text.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, fingerprint: str) -> str | None:
        text = self._entries.get(fingerprint)
        if text is None:
            self.misses += 1
        else:
            self.hits += 1
        return text

    def put(self, fingerprint: str, text: str) -> None:
        if fingerprint in self._entries:
            raise KeyError(f"fingerprint already cached: {fingerprint[:16]}")
        self._entries[fingerprint] = text
