#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Load license-checker manifests (``npx license-checker --json``)."""

import json, os, re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

Licenses = Union[str, Tuple[str, ...], None]


class ManifestError(Exception):
    def __init__(self, message, detail=None):
        super().__init__(message)
        self.detail = detail


@dataclass(frozen=True)
class DependencyRecord:
    licenses: Licenses = None
    license_file: Optional[str] = None
    repository: Optional[str] = None
    publisher: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_json(cls, info):
        # "path" (local install dir) and unknown keys are not carried over
        lic = info.get("licenses")
        if isinstance(lic, list):
            lic = tuple(str(x) for x in lic if x) or None
        elif lic is not None:
            lic = str(lic) or None
        return cls(
            licenses=lic,
            license_file=_opt_str(info.get("licenseFile")),
            repository=_opt_str(info.get("repository")),
            publisher=_opt_str(info.get("publisher")),
            email=_opt_str(info.get("email")),
        )


@dataclass(frozen=True)
class NoticeEntry:
    name: str
    version: Optional[str] = None
    licenses: Licenses = None
    repository: Optional[str] = None
    publisher: Optional[str] = None
    email: Optional[str] = None
    license_link: Optional[str] = None

    @classmethod
    def from_record(cls, key, record, license_link=None):
        name, version = split_dependency_key(key)
        return cls(
            name=name,
            version=version,
            licenses=record.licenses,
            repository=record.repository,
            publisher=record.publisher,
            email=record.email,
            license_link=license_link,
        )


def _opt_str(v):
    if v is None: return None
    v = str(v)
    return v or None


def split_dependency_key(key: str) -> Tuple[str, Optional[str]]:
    """``@scope/pkg@1.2.3`` -> (``@scope/pkg``, ``1.2.3``); ``pkg@1.2.3`` -> (``pkg``, ``1.2.3``)."""
    if key.startswith("@"):
        idx = key.rfind("@")
        # a bare "@scope/pkg" has no version
        if idx == 0:
            return key, None
        name, version = key[:idx], key[idx + 1:]
    else:
        parts = key.split("@")
        name, version = parts[0], (parts[1] if len(parts) > 1 else None)
    return name, (version or None)


def sanitize_file_name(name: str, source_path: str) -> str:
    return re.sub(r"[/@]", "_", name) + os.path.splitext(source_path)[1]


def load_manifest(path):
    """Return an ordered ``{dependency key: DependencyRecord}`` mapping.

    Raises ManifestError when the file is missing, is not JSON, or is not a
    JSON object of objects.
    """
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise ManifestError(f"The file at {path} does not exist.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except (ValueError, OSError) as e:
        raise ManifestError(f"Failed to parse {path}. Ensure it is valid JSON.", detail=e) from e

    if not isinstance(doc, dict):
        raise ManifestError(f"Failed to parse {path}. Expected a JSON object keyed by dependency.")
    manifest = {}
    for key, info in doc.items():
        if not isinstance(info, dict):
            raise ManifestError(f"Failed to parse {path}. Entry {key!r} is not a JSON object.")
        manifest[key] = DependencyRecord.from_json(info)
    return manifest
