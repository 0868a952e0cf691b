import json
from pathlib import Path

import pytest

from license_manifest import (
    DependencyRecord,
    ManifestError,
    NoticeEntry,
    load_manifest,
    sanitize_file_name,
    split_dependency_key,
)


@pytest.mark.parametrize("key,expected", [
    ("@scope/pkg@1.2.3", ("@scope/pkg", "1.2.3")),
    ("pkg@1.2.3", ("pkg", "1.2.3")),
    ("pkg", ("pkg", None)),
    ("pkg@", ("pkg", None)),
    ("@scope/pkg", ("@scope/pkg", None)),
    ("a@b@c", ("a", "b")),
])
def test_split_dependency_key(key, expected):
    assert split_dependency_key(key) == expected


def test_sanitize_file_name():
    assert sanitize_file_name("@scope/pkg", "/x/LICENSE.txt") == "_scope_pkg.txt"
    assert sanitize_file_name("foo", "/x/LICENSE") == "foo"
    assert sanitize_file_name("foo", "/x/license.md") == "foo.md"


def test_load_manifest_keeps_order_and_drops_path(tmp_path: Path):
    doc = {
        "zeta@1.0.0": {"licenses": "MIT", "path": "/node_modules/zeta", "licenseFile": "/L"},
        "@a/alpha@2.0.0": {"licenses": ["MIT", "Apache-2.0"], "repository": "https://github.com/a/alpha"},
    }
    p = tmp_path / "licenses.json"
    p.write_text(json.dumps(doc), encoding="utf-8")

    manifest = load_manifest(str(p))

    assert list(manifest) == ["zeta@1.0.0", "@a/alpha@2.0.0"]
    assert manifest["zeta@1.0.0"] == DependencyRecord(licenses="MIT", license_file="/L")
    assert manifest["@a/alpha@2.0.0"].licenses == ("MIT", "Apache-2.0")
    assert not hasattr(manifest["zeta@1.0.0"], "path")


def test_load_manifest_missing(tmp_path: Path):
    with pytest.raises(ManifestError, match="does not exist"):
        load_manifest(str(tmp_path / "nope.json"))


def test_load_manifest_invalid_json(tmp_path: Path):
    p = tmp_path / "licenses.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError) as exc:
        load_manifest(str(p))
    assert str(p) in str(exc.value)
    assert exc.value.detail is not None


@pytest.mark.parametrize("doc", ["[]", '{"foo@1.0.0": "MIT"}'])
def test_load_manifest_wrong_shape(tmp_path: Path, doc):
    p = tmp_path / "licenses.json"
    p.write_text(doc, encoding="utf-8")
    with pytest.raises(ManifestError):
        load_manifest(str(p))


def test_notice_entry_from_record():
    rec = DependencyRecord(licenses="ISC", publisher="Jane", email="j@example.com")
    entry = NoticeEntry.from_record("@s/p@0.1.0", rec, "third-party-licenses/_s_p")
    assert entry.name == "@s/p"
    assert entry.version == "0.1.0"
    assert entry.licenses == "ISC"
    assert entry.license_link == "third-party-licenses/_s_p"
    assert rec.license_file is None
