import logging
from dataclasses import dataclass
from time import monotonic
from typing import Any

from pydantic import BaseModel, Field, model_validator

from prd_kit.observability import names
from prd_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

# Ordered from most to least meaningful split point. The empty
# separator means "split between any two characters".
DEFAULT_SEPARATORS = [
    "\n\n",
    "\n",
    ". ",
    "! ",
    "? ",
    "; ",
    ", ",
    " ",
    "",
]

# Hard splits back up to a space only if it keeps this share of the window
WORD_BOUNDARY_MIN_FILL = 0.7
# Overlap starts at a space only if at least this many characters remain
OVERLAP_MIN_TAIL = 10


@dataclass(frozen=True)
class ChunkMetadata:
    index: int
    start_position: int
    end_position: int
    size: int
    has_overlap: bool


@dataclass(frozen=True)
class Chunk:
    content: str
    metadata: ChunkMetadata


class ChunkingOptions(BaseModel):
    chunk_size: int = Field(gt=0)
    chunk_overlap: int = Field(default=0, ge=0)
    separators: list[str] = Field(default_factory=lambda: list(DEFAULT_SEPARATORS))
    preserve_words: bool = True

    class Config:
        extra = "forbid"
        frozen = True

    @model_validator(mode="after")
    def _overlap_below_chunk_size(self) -> "ChunkingOptions":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be < chunk_size")
        return self


def chunk_text(
    text: Any,
    options: ChunkingOptions,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Split text into pieces of at most `chunk_size` characters.

    Pieces are cut at the most meaningful separator available, then every
    piece after the first is prefixed with the tail of its predecessor
    (`chunk_overlap` characters at most). Overlap can push a chunk past
    `chunk_size`; positions in the metadata refer to the pre-overlap pieces.
    """
    if not isinstance(text, str) or not text.strip():
        return []

    start = monotonic()
    if len(text) <= options.chunk_size:
        paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
        if len(paragraphs) > 1:
            # Short paragraphs stay separate; no overlap between them
            chunks = _to_chunks(paragraphs, overlap=0)
        else:
            chunks = _to_chunks([text], overlap=0)
    else:
        pieces = _split_pieces(
            text, options.chunk_size, options.separators, options.preserve_words
        )
        chunks = _to_chunks(pieces, overlap=options.chunk_overlap)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    logger.debug(
        "Chunked %d chars into %d chunks (chunk_size=%d, overlap=%d)",
        len(text),
        len(chunks),
        options.chunk_size,
        options.chunk_overlap,
    )
    return chunks


def _split_on(text: str, separator: str) -> list[str]:
    if separator == "":
        return list(text)
    return text.split(separator)


def _split_pieces(
    text: str, chunk_size: int, separators: list[str], preserve_words: bool
) -> list[str]:
    # Work items are (text, separator cursor); a cursor of None marks a
    # finished piece. Items are popped in document order.
    pieces: list[str] = []
    work: list[tuple[str, int | None]] = [(text, 0)]

    while work:
        current, cursor = work.pop()
        if cursor is None or len(current) <= chunk_size:
            pieces.append(current)
            continue

        for i in range(cursor, len(separators)):
            separator = separators[i]
            parts = _split_on(current, separator)
            if len(parts) > 1:
                work.extend(
                    reversed(_pack_parts(parts, separator, chunk_size, i + 1))
                )
                break
        else:
            logger.debug("No separator splits a %d char run", len(current))
            pieces.extend(_hard_split(current, chunk_size, preserve_words))

    return [p for p in pieces if p]


def _pack_parts(
    parts: list[str], separator: str, chunk_size: int, next_cursor: int
) -> list[tuple[str, int | None]]:
    packed: list[tuple[str, int | None]] = []
    buffer = ""
    last = len(parts) - 1

    for j, part in enumerate(parts):
        if j < last:
            part += separator

        if len(buffer) + len(part) <= chunk_size:
            buffer += part
            continue

        if buffer.strip():
            packed.append((buffer.strip(), None))
        if len(part) > chunk_size:
            packed.append((part, next_cursor))
            buffer = ""
        else:
            buffer = part

    if buffer.strip():
        packed.append((buffer.strip(), None))
    return packed


def _hard_split(text: str, chunk_size: int, preserve_words: bool) -> list[str]:
    pieces: list[str] = []
    start = 0

    while start < len(text):
        end = min(start + chunk_size, len(text))

        if preserve_words and end < len(text):
            last_space = text.rfind(" ", 0, end + 1)
            if last_space > start + chunk_size * WORD_BOUNDARY_MIN_FILL:
                end = last_space + 1

        piece = text[start:end].strip()
        if piece:
            pieces.append(piece)

        start = end
        while start < len(text) and text[start] == " ":
            start += 1

    return pieces


def _overlap_tail(previous: str, overlap: int) -> str:
    if len(previous) <= overlap:
        return previous

    cut = len(previous) - overlap
    space = previous.find(" ", cut)
    if space != -1 and space < len(previous) - OVERLAP_MIN_TAIL:
        return previous[space + 1 :]
    return previous[cut:]


def _to_chunks(pieces: list[str], overlap: int) -> list[Chunk]:
    chunks: list[Chunk] = []
    position = 0

    for index, piece in enumerate(pieces):
        content = piece
        has_overlap = False
        if index > 0 and overlap > 0:
            tail = _overlap_tail(pieces[index - 1], overlap)
            if tail:
                content = f"{tail} {piece}"
                has_overlap = True

        chunks.append(
            Chunk(
                content=content,
                metadata=ChunkMetadata(
                    index=index,
                    start_position=position,
                    end_position=position + len(piece),
                    size=len(content),
                    has_overlap=has_overlap,
                ),
            )
        )
        position += len(piece)

    return chunks
