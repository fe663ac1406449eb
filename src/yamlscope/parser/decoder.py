"""Character-encoding detection and decoding of raw YAML bytes.

Detection follows the YAML 1.2 rule that a stream starts either with a
byte order mark or with an ASCII character, so the position of NUL bytes
in the first four bytes identifies the encoding when no BOM is present.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger("yamlscope.decoder")

UTF_32_BE = "utf-32-be"
UTF_32_LE = "utf-32-le"
UTF_16_BE = "utf-16-be"
UTF_16_LE = "utf-16-le"
UTF_8 = "utf-8"
UTF_8_SIG = "utf-8-sig"

_BOMS: dict[str, bytes] = {
    UTF_32_BE: codecs.BOM_UTF32_BE,
    UTF_32_LE: codecs.BOM_UTF32_LE,
    UTF_16_BE: codecs.BOM_UTF16_BE,
    UTF_16_LE: codecs.BOM_UTF16_LE,
    UTF_8_SIG: codecs.BOM_UTF8,
}


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded with the selected encoding."""

    def __init__(self, encoding: str, reason: str) -> None:
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"cannot decode input as {encoding}: {reason}")


def detect_encoding(data: bytes, override: str | None = None) -> str:
    """Return the Python codec name for ``data``.

    ``override`` bypasses detection entirely.
    """
    if override:
        logger.warning(
            "Encoding override %r is in use. Forcing an encoding is a "
            "temporary workaround and will be removed in a future release.",
            override,
        )
        return override
    if len(data) >= 4:
        if data[:4] == b"\x00\x00\xfe\xff":
            return UTF_32_BE
        if data[:3] == b"\x00\x00\x00":
            return UTF_32_BE
        if data[:4] == b"\xff\xfe\x00\x00":
            return UTF_32_LE
        if data[1:4] == b"\x00\x00\x00":
            return UTF_32_LE
    if len(data) >= 2:
        if data[:2] == b"\xfe\xff":
            return UTF_16_BE
        if data[0] == 0:
            return UTF_16_BE
        if data[:2] == b"\xff\xfe" and data[2:4] != b"\x00\x00":
            return UTF_16_LE
        if data[1] == 0:
            return UTF_16_LE
    if data[:3] == codecs.BOM_UTF8:
        return UTF_8_SIG
    return UTF_8


def auto_decode(data: bytes, override: str | None = None) -> str:
    """Decode ``data`` with the detected (or forced) encoding.

    The BOM of the detected encoding is not part of the returned text.
    """
    encoding = detect_encoding(data, override)
    bom = _BOMS.get(encoding)
    if bom is not None and data.startswith(bom):
        data = data[len(bom):]
    codec = UTF_8 if encoding == UTF_8_SIG else encoding
    try:
        return data.decode(codec)
    except LookupError as exc:
        raise DecodeError(encoding, "unknown encoding") from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(encoding, f"{exc.reason} at byte {exc.start}") from exc


def lines_in_files(paths: Iterable[str | Path], override: str | None = None) -> Iterator[str]:
    """Yield every line of every file, auto-decoded, without line endings."""
    for path in paths:
        text = auto_decode(Path(path).read_bytes(), override)
        lines = text.split("\n")
        # A final line break does not start another line
        if lines[-1] == "":
            lines.pop()
        for line in lines:
            yield line[:-1] if line.endswith("\r") else line
