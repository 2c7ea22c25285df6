import argparse
import os
import sys
from pathlib import Path
from urllib.request import urlopen

from blessed import Terminal

from .checksum import fetch_checksums
from .color_modes import COLOR_MODE_COLOR, ChangeStyle, detect_color_mode
from .config import DEFAULT_ORG, UpdateConfig, validate_config
from .formula import PLATFORMS, release_url, rewrite_formula


def build_parser():
    parser = argparse.ArgumentParser(
        prog="brewup",
        description="brewup: Update Homebrew formula with new version and checksums",
    )
    parser.add_argument(
        "--repo", "-r", required=True, help="Repository name (e.g., sbomasm)"
    )
    parser.add_argument(
        "--version", "-v", required=True, help="Version tag (e.g., v1.0.5)"
    )
    parser.add_argument(
        "--file",
        "-f",
        required=True,
        help="Path to Homebrew formula file (e.g., sbomasm.rb)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without modifying the file",
    )
    parser.add_argument(
        "--org",
        default=DEFAULT_ORG,
        help="GitHub organization that publishes the releases (default: %(default)s)",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=_validate_jobs,
        default=1,
        help=(
            "Number of release binaries to download at once; on a failure or "
            "Ctrl-C, downloads already started still run to completion"
        ),
    )
    return parser


def _validate_jobs(value):
    try:
        jobs = int(value)
    except (TypeError, ValueError) as error:
        raise argparse.ArgumentTypeError(
            "jobs must be an integer: {!r}".format(value)
        ) from error
    if jobs < 1:
        raise argparse.ArgumentTypeError("jobs must be >= 1")
    return jobs


def config_from_args(args):
    return UpdateConfig(
        repo=args.repo,
        version=args.version,
        formula=Path(args.file),
        dry_run=args.dry_run,
        org=args.org,
        jobs=args.jobs,
    )


def _default_style(out):
    terminal = Terminal(stream=out)
    mode = detect_color_mode(os.environ, terminal)
    if mode == COLOR_MODE_COLOR and not terminal.does_styling:
        terminal = Terminal(stream=out, force_styling=True)
    return ChangeStyle(terminal, mode)


def _read_formula(path):
    # newline="" keeps CRLF files byte-identical on write-back.
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_formula(path, content):
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def print_changes(config, changes, style, out):
    print(style.heading("Changes to {}:".format(config.formula)), file=out)
    print(
        "Version: {} -> {}".format(
            style.old(changes.old_version), style.new(changes.new_version)
        ),
        file=out,
    )
    for change in changes.platforms:
        print(
            "Checksum ({}): {} -> {}".format(
                change.platform.label,
                style.old(change.old_checksum),
                style.new(change.new_checksum),
            ),
            file=out,
        )


def update_formula(config, out=None, opener=urlopen, style=None):
    """Validate, download, rewrite and report; write unless dry-run.

    Nothing touches the formula file before every download has succeeded.
    """
    if out is None:
        out = sys.stdout
    validate_config(config)
    if style is None:
        style = _default_style(out)

    original = _read_formula(config.formula)

    urls = [
        release_url(config.org, config.repo, config.version, platform)
        for platform in PLATFORMS
    ]
    checksums = fetch_checksums(
        urls,
        jobs=config.jobs,
        opener=opener,
        on_start=lambda url: print("Downloading {}".format(url), file=out, flush=True),
    )

    updated, changes = rewrite_formula(
        original,
        config.org,
        config.repo,
        config.version,
        dict(zip(PLATFORMS, checksums)),
    )

    print_changes(config, changes, style, out)

    if config.dry_run:
        print("Dry-run mode: No changes written to file", file=out)
        print("Updated content preview:", file=out)
        print(updated, file=out)
        return changes

    _write_formula(config.formula, updated)
    print("Successfully updated {}".format(config.formula), file=out)
    return changes


def main(args=None):
    if args is None:
        args = build_parser().parse_args()
    try:
        update_formula(config_from_args(args))
        return 0
    except KeyboardInterrupt:
        print("Stopping...", file=sys.stderr)
        return 130


def cli(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return main(args)
    except Exception as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(cli())
