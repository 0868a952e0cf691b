#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Collect third-party licenses from a license-checker JSON file.

Copies each dependency's license file into third-party-licenses/ and writes a
THIRD_PARTY_LICENSES.md summary next to it.

Generate the input with:
    npx license-checker --production --json > licenses.json

Usage:
    collect_third_party_licenses.py <licenses.json> [--include <include.md>]
"""

import argparse, os, shutil, sys
from pathlib import PurePath

from license_manifest import ManifestError, NoticeEntry, load_manifest, sanitize_file_name, split_dependency_key
from sbom_export import write_sbom
from third_party_notice import render_document

OUTPUT_MD = "THIRD_PARTY_LICENSES.md"
LICENSES_DIR = "third-party-licenses"
USAGE = "collect_third_party_licenses.py <licenses.json> [--include <include.md>]"


class UsageParser(argparse.ArgumentParser):
    # usage errors exit 1, not argparse's 2
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def build_parser():
    ap = UsageParser(prog="collect_third_party_licenses.py", usage=USAGE,
                     description="Copy third-party license files and write a license summary",
                     epilog="<licenses.json> is the license-checker output and must be the first argument.")
    ap.add_argument("--include", help="markdown file appended verbatim to the summary")
    ap.add_argument("--output", default=OUTPUT_MD, help=f"summary file (default: {OUTPUT_MD})")
    ap.add_argument("--licenses-dir", default=LICENSES_DIR, help=f"license file directory (default: {LICENSES_DIR})")
    ap.add_argument("--sbom", help="also write a CycloneDX JSON SBOM to this path")
    return ap


def parse_args(argv):
    ap = build_parser()
    if not argv:
        ap.error("Path to license file must be provided.")
    if argv[0] == "--include":
        ap.error("Path to licenses.json must be provided before the --include flag.")
    if argv[-1] == "--include":
        ap.error("The --include flag must be followed by a filename.")
    if argv[0] in ("-h", "--help"):
        ap.parse_args(argv[:1])
    # argv[0] is always the manifest, even when it starts with "-"
    args = ap.parse_args(argv[1:])
    args.manifest = argv[0]
    if args.include is not None:
        args.include = os.path.abspath(args.include)
        if not os.path.exists(args.include):
            ap.error(f"The file at {args.include} does not exist.")
    return args


def relative_link(path, start):
    return PurePath(os.path.relpath(path, start)).as_posix()


def collect_entries(manifest, licenses_dir, output_dir):
    entries = []
    for key, record in manifest.items():
        name, _ = split_dependency_key(key)
        link = None
        src = record.license_file
        if src and os.path.exists(src):
            dst = os.path.join(licenses_dir, sanitize_file_name(name, src))
            try:
                shutil.copyfile(src, dst)
            except OSError as e:
                print(f"Failed to copy: {src} {e}", file=sys.stderr)
            else:
                print(f"Copied: {src} -> {dst}")
                link = relative_link(dst, output_dir)
        else:
            print(f"No license file found for dependency: {name}", file=sys.stderr)
        entries.append(NoticeEntry.from_record(key, record, link))
    return entries


def read_include(path):
    with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    output = os.path.abspath(args.output)
    output_dir = os.path.dirname(output)
    licenses_dir = os.path.abspath(args.licenses_dir)

    try:
        manifest = load_manifest(args.manifest)
    except ManifestError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.detail is not None:
            print(e.detail, file=sys.stderr)
        return 1

    os.makedirs(licenses_dir, exist_ok=True)
    entries = collect_entries(manifest, licenses_dir, output_dir)

    include_text = None
    if args.include is not None:
        try:
            include_text = read_include(args.include)
        except OSError as e:
            print(f"Error: Failed to read include file at {args.include}.", file=sys.stderr)
            print(e, file=sys.stderr)
            return 1
        print(f"Included: {args.include}")

    report = render_document(entries, relative_link(licenses_dir, output_dir), include_text)
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(output, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(report)
        print(f"Wrote license file {output}")
        if args.sbom:
            write_sbom(entries, args.sbom)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
