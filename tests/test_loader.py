"""Tests for corpus bundle writing, loading and validation."""

import json

import msgpack
import pytest

import docsift
from docsift._errors import DocsiftChecksumError, DocsiftError, DocsiftVersionError
from docsift._loader import (
    HEADINGS_FILE,
    MANIFEST_FILE,
    _sha256,
    load_corpus,
    write_corpus,
)


@pytest.fixture
def bundle(tmp_path, headings):
    return write_corpus(headings, tmp_path / "corpus")


def test_write_creates_manifest(bundle):
    with open(bundle / MANIFEST_FILE) as f:
        manifest = json.load(f)
    assert manifest["version"] == "1.0"
    assert len(manifest["files"][HEADINGS_FILE]) == 64


def test_load_restores_headings(bundle, headings):
    assert load_corpus(bundle) == headings


def test_load_library(bundle):
    library = docsift.load(bundle)
    assert library.get_statistics().document_count == 8
    assert library.search("select")[0].title == "SELECT Statement"


def test_missing_directory(tmp_path):
    with pytest.raises(DocsiftError, match="manifest.json not found"):
        load_corpus(tmp_path / "nonexistent")


def test_missing_data_file(bundle):
    (bundle / HEADINGS_FILE).unlink()
    with pytest.raises(DocsiftError, match="Missing corpus file"):
        load_corpus(bundle)


def test_version_mismatch(bundle):
    manifest_path = bundle / MANIFEST_FILE
    with open(manifest_path) as f:
        manifest = json.load(f)
    manifest["version"] = "99.0"
    with open(manifest_path, "w") as f:
        json.dump(manifest, f)
    with pytest.raises(DocsiftVersionError):
        load_corpus(bundle)


def test_checksum_mismatch(bundle):
    with open(bundle / HEADINGS_FILE, "ab") as f:
        f.write(b"tampered")
    with pytest.raises(DocsiftChecksumError):
        load_corpus(bundle)


def _write_payload(data_dir, payload):
    """Bundle whose records file holds raw bytes with a matching checksum."""
    data_dir = write_corpus([], data_dir)
    headings_path = data_dir / HEADINGS_FILE
    with open(headings_path, "wb") as f:
        f.write(payload)
    manifest_path = data_dir / MANIFEST_FILE
    with open(manifest_path) as f:
        manifest = json.load(f)
    manifest["files"][HEADINGS_FILE] = _sha256(headings_path)
    with open(manifest_path, "w") as f:
        json.dump(manifest, f)
    return data_dir


def test_malformed_record(tmp_path):
    data_dir = _write_payload(tmp_path / "bad", msgpack.packb([[1, "Only two fields"]]))
    with pytest.raises(DocsiftError, match="Malformed heading record"):
        load_corpus(data_dir)


@pytest.mark.parametrize("record", [
    [None, "Title", None, []],
    ["h2", "Title", None, []],
    [1.5, "Title", None, []],
    [1, None, None, []],
    [1, "Title", 7, []],
    [1, "Title", None, None],
    [1, "Title", None, [["div", None, []]]],
    [1, "Title", None, [[None, "text", []]]],
    [1, "Title", None, [["ul", "", [1, 2]]]],
    [1, "Title", None, [["ul", "", "not a list"]]],
])
def test_mistyped_record_fields(tmp_path, record):
    data_dir = _write_payload(tmp_path / "bad", msgpack.packb([record]))
    with pytest.raises(DocsiftError, match="Malformed heading record"):
        load_corpus(data_dir)


def test_corrupt_payload(tmp_path):
    data_dir = _write_payload(tmp_path / "bad", b"\xc1\xc1\xc1")
    with pytest.raises(DocsiftError, match="Corrupt headings.bin"):
        load_corpus(data_dir)


def test_payload_not_a_list(tmp_path):
    data_dir = _write_payload(tmp_path / "bad", msgpack.packb({"level": 1}))
    with pytest.raises(DocsiftError, match="does not hold a list"):
        load_corpus(data_dir)
