"""Recursive character text chunking with overlapping windows.

Splits extracted résumé text into chunks of at most ``chunk_size``
characters for embedding.  The splitter tries the coarsest boundary first
and only falls back to finer ones when a piece is still too large:

    paragraph ("\\n\\n") -> line ("\\n") -> sentence (". ") -> word (" ") -> character

Each separator stays attached to the end of the piece it terminates, so a
chunk is always an exact substring of the source text.  Consecutive chunks
share up to ``chunk_overlap`` characters of trailing pieces so that a
sentence spanning a boundary is still fully contained in one chunk.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(logger_name=__name__)

_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", ". ", " ", "")


class TextChunker:
    """Splits text into overlapping, size-bounded chunks.

    Parameters
    ----------
    chunk_size:
        Maximum number of characters per chunk (default 512).
    chunk_overlap:
        Maximum number of characters carried over from the end of one chunk
        to the start of the next (default 100).  Must be smaller than
        *chunk_size*.
    """

    def __init__(self, chunk_size: int = 512, chunk_overlap: int = 100) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def split(self, text: str) -> list[str]:
        """Split *text* into chunks in source order.

        Returns ``[]`` for empty or whitespace-only input and ``[text]`` when
        the whole input already fits in one chunk.
        """
        if not text or not text.strip():
            return []

        if len(text) <= self._chunk_size:
            chunks = [text]
        else:
            chunks = self._split_recursive(text, list(_SEPARATORS))

        logger.debug(
            "text_chunked",
            characters=len(text),
            chunks=len(chunks),
            chunk_size=self._chunk_size,
            chunk_overlap=self._chunk_overlap,
        )
        return chunks

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _split_recursive(self, text: str, separators: list[str]) -> list[str]:
        """Split on the coarsest separator present, recursing into oversized pieces."""
        separator = separators[-1]
        finer: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "":
                separator = candidate
                break
            if candidate in text:
                separator = candidate
                finer = separators[i + 1 :]
                break

        chunks: list[str] = []
        fitting: list[str] = []
        for piece in self._split_keep_separator(text, separator):
            if len(piece) <= self._chunk_size:
                fitting.append(piece)
                continue

            if fitting:
                chunks.extend(self._merge(fitting))
                fitting = []
            if finer:
                chunks.extend(self._split_recursive(piece, finer))
            else:
                chunks.append(piece)

        if fitting:
            chunks.extend(self._merge(fitting))
        return chunks

    def _merge(self, pieces: list[str]) -> list[str]:
        """Greedily pack *pieces* into chunks, carrying a tail as overlap."""
        chunks: list[str] = []
        window: list[str] = []
        total = 0

        for piece in pieces:
            length = len(piece)
            if total + length > self._chunk_size and window:
                self._emit(chunks, window)
                # Drop leading pieces until the tail fits the overlap budget
                # and leaves room for the incoming piece.
                while total > self._chunk_overlap or (
                    total + length > self._chunk_size and total > 0
                ):
                    total -= len(window.pop(0))
            window.append(piece)
            total += length

        self._emit(chunks, window)
        return chunks

    @staticmethod
    def _emit(chunks: list[str], window: list[str]) -> None:
        chunk = "".join(window)
        if chunk.strip():
            chunks.append(chunk)

    @staticmethod
    def _split_keep_separator(text: str, separator: str) -> list[str]:
        """Split *text* on *separator*, keeping it at the end of each piece."""
        if separator == "":
            return list(text)
        parts = text.split(separator)
        pieces = [part + separator for part in parts[:-1]]
        pieces.append(parts[-1])
        return [piece for piece in pieces if piece]
