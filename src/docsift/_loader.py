"""Corpus bundle I/O: manifest validation, SHA-256 checksums, msgpack records."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import msgpack

from ._errors import DocsiftChecksumError, DocsiftError, DocsiftVersionError
from ._types import ContentBlock, HeadingBlock

logger = logging.getLogger(__name__)

CORPUS_VERSION = "1.0"
HEADINGS_FILE = "headings.bin"
MANIFEST_FILE = "manifest.json"


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def _read_manifest(data_dir: Path) -> dict[str, Any]:
    manifest_path = data_dir / MANIFEST_FILE
    if not manifest_path.exists():
        raise DocsiftError(f"{MANIFEST_FILE} not found in {data_dir}")
    with open(manifest_path) as f:
        return json.load(f)


def _validate_manifest(manifest: dict[str, Any], data_dir: Path) -> None:
    version = manifest.get("version")
    if version != CORPUS_VERSION:
        raise DocsiftVersionError(
            f"Expected corpus version {CORPUS_VERSION!r}, got {version!r}"
        )
    filepath = data_dir / HEADINGS_FILE
    if not filepath.exists():
        raise DocsiftError(f"Missing corpus file: {filepath}")
    expected = manifest.get("files", {}).get(HEADINGS_FILE)
    if expected is None:
        raise DocsiftError(f"No checksum in manifest for {HEADINGS_FILE}")
    actual = _sha256(filepath)
    if actual != expected:
        raise DocsiftChecksumError(
            f"Checksum mismatch for {HEADINGS_FILE}: "
            f"expected {expected[:16]}..., got {actual[:16]}..."
        )


def _encode_heading(heading: HeadingBlock) -> list[Any]:
    return [
        heading.level,
        heading.text,
        heading.id,
        [[b.tag, b.text, list(b.items)] for b in heading.blocks],
    ]


def _decode_block(raw: Any) -> ContentBlock:
    tag, text, items = raw
    if not isinstance(tag, str) or not isinstance(text, str):
        raise TypeError("block tag and text must be strings")
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        raise TypeError("block items must be a list of strings")
    return ContentBlock(tag=tag, text=text, items=tuple(items))


def _decode_heading(record: Any) -> HeadingBlock:
    try:
        level, text, heading_id, raw_blocks = record
        if not isinstance(level, int) or isinstance(level, bool):
            raise TypeError("level must be an integer")
        if not isinstance(text, str):
            raise TypeError("heading text must be a string")
        if heading_id is not None and not isinstance(heading_id, str):
            raise TypeError("heading id must be a string or nil")
        blocks = tuple(_decode_block(raw) for raw in raw_blocks)
    except (TypeError, ValueError) as e:
        raise DocsiftError(f"Malformed heading record: {record!r}") from e
    return HeadingBlock(level=level, text=text, id=heading_id, blocks=blocks)


def write_corpus(headings: Iterable[HeadingBlock], data_dir: Path | str) -> Path:
    """Write headings as a bundle (records file + manifest) and return its directory."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    records = [_encode_heading(h) for h in headings]
    headings_path = data_dir / HEADINGS_FILE
    with open(headings_path, "wb") as f:
        f.write(msgpack.packb(records, use_bin_type=True))

    manifest = {
        "version": CORPUS_VERSION,
        "files": {HEADINGS_FILE: _sha256(headings_path)},
    }
    with open(data_dir / MANIFEST_FILE, "w") as f:
        json.dump(manifest, f, indent=2)

    logger.info("Wrote %d headings to %s", len(records), data_dir)
    return data_dir


def load_corpus(data_dir: Path | str) -> list[HeadingBlock]:
    """Validate and decode a corpus bundle into heading blocks."""
    data_dir = Path(data_dir)
    manifest = _read_manifest(data_dir)
    _validate_manifest(manifest, data_dir)

    with open(data_dir / HEADINGS_FILE, "rb") as f:
        payload = f.read()
    try:
        raw = msgpack.unpackb(payload, raw=False)
    except (msgpack.exceptions.UnpackException, ValueError) as e:
        raise DocsiftError(f"Corrupt {HEADINGS_FILE}: {e}") from e
    if not isinstance(raw, list):
        raise DocsiftError(f"{HEADINGS_FILE} does not hold a list of headings")

    headings = [_decode_heading(record) for record in raw]
    logger.info("Loaded %d headings from %s", len(headings), data_dir)
    return headings
