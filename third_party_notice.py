#!/usr/bin/env python3
# -*- coding: utf-8 -*-

TITLE = "THIRD-PARTY SOFTWARE LICENSES"
SECTION = "Node Dependencies"


def format_licenses(licenses):
    if isinstance(licenses, (list, tuple)):
        return ",".join(licenses)
    return licenses


def render_header(licenses_link):
    out = []
    out.append(f"# {TITLE}\n")
    out.append("This project includes third-party software components, which are distributed under the")
    out.append("following licenses. Full licenses and notices are provided in the")
    out.append(f"[{licenses_link}/]({licenses_link}) subdirectory.\n")
    out.append(f"## {SECTION}\n")
    return "\n".join(out) + "\n"


def render_entry(entry):
    out = [f"### {entry.name}", "", f"- Name: {entry.name}"]
    if entry.version:
        out.append(f"- Version: {entry.version}")
    if entry.licenses:
        out.append(f"- License: {format_licenses(entry.licenses)}")
    if entry.repository:
        out.append(f"- Repository: [{entry.repository}]({entry.repository})")
    if entry.publisher:
        out.append(f"- Publisher: {entry.publisher}")
    if entry.email:
        out.append(f"- Email: [{entry.email}](mailto:{entry.email})")
    if entry.license_link:
        out.append(f"- License File: [{entry.license_link}]({entry.license_link})")
    return "\n".join(out) + "\n\n"


def render_document(entries, licenses_link, include_text=None):
    """Header, one block per entry in order, then include_text verbatim; trimmed."""
    doc = render_header(licenses_link)
    doc += "".join(render_entry(e) for e in entries)
    if include_text:
        doc += include_text
    return doc.strip()
