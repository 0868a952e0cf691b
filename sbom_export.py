#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Export collected notice entries as a CycloneDX JSON SBOM."""

import os

from cyclonedx.factory.license import LicenseFactory
from cyclonedx.model import ExternalReference, ExternalReferenceType, XsUri
from cyclonedx.model.bom import Bom
from cyclonedx.model.component import Component, ComponentType
from cyclonedx.output.json import JsonV1Dot5
from packageurl import PackageURL


def npm_purl(name, version):
    namespace = None
    if name.startswith("@") and "/" in name:
        namespace, name = name.split("/", 1)
    return PackageURL(type="npm", namespace=namespace, name=name, version=version)


def make_licenses(licenses):
    if not licenses:
        return []
    if isinstance(licenses, str):
        licenses = [licenses]
    lf = LicenseFactory()
    return [lf.make_from_string(lic) for lic in licenses]


def make_component(entry):
    purl = npm_purl(entry.name, entry.version)
    refs = []
    if entry.repository:
        refs.append(ExternalReference(type=ExternalReferenceType.VCS, url=XsUri(entry.repository)))
    return Component(
        name=entry.name,
        version=entry.version,
        type=ComponentType.LIBRARY,
        purl=purl,
        bom_ref=purl.to_string(),
        licenses=make_licenses(entry.licenses),
        external_references=refs,
        publisher=entry.publisher,
    )


def build_bom(entries):
    return Bom(components=[make_component(e) for e in entries])


def write_sbom(entries, path):
    path = os.path.abspath(path)
    text = JsonV1Dot5(build_bom(entries)).output_as_string(indent=2)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    print(f"Wrote SBOM {path}")
    return path
