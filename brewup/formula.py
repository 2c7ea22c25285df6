"""Pattern-based rewriting of version, url and sha256 fields in a formula."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, NamedTuple


class Platform(NamedTuple):
    os: str
    arch: str

    @property
    def label(self) -> str:
        return f"{self.os}-{self.arch}"


PLATFORMS = (
    Platform("darwin", "arm64"),
    Platform("darwin", "amd64"),
    Platform("linux", "arm64"),
    Platform("linux", "amd64"),
)

VERSION_DECL = re.compile(r'version\s+"(v\d+\.\d+\.\d+)"')

_NOUNZIP = r'",\s*:using\s*=>\s*:nounzip'
_CHECKSUM_TAIL = r'\r?\n\s*sha256 ")([0-9a-f]{64})(")'


@dataclass(frozen=True)
class PlatformChange:
    platform: Platform
    url: str
    old_checksum: str
    new_checksum: str


@dataclass
class FormulaChanges:
    old_version: str = ""
    new_version: str = ""
    platforms: list[PlatformChange] = field(default_factory=list)


def binary_name(repo: str, platform: Platform) -> str:
    return f"{repo}-{platform.os}-{platform.arch}"


def release_url(org: str, repo: str, version: str, platform: Platform) -> str:
    return (
        f"https://github.com/{org}/{repo}/releases/download/"
        f"{version}/{binary_name(repo, platform)}"
    )


def _any_version_url(org: str, repo: str, platform: Platform) -> str:
    # Regex source for a release url of this binary at any v<N>.<N>.<N> tag.
    return (
        r'url "https://github\.com/'
        + re.escape(org)
        + "/"
        + re.escape(repo)
        + r"/releases/download/v\d+\.\d+\.\d+/"
        + re.escape(binary_name(repo, platform))
    )


def url_entry_pattern(org: str, repo: str, platform: Platform) -> re.Pattern[str]:
    return re.compile(_any_version_url(org, repo, platform) + _NOUNZIP)


def checksum_pattern(url: str) -> re.Pattern[str]:
    return re.compile("(url " + re.escape(f'"{url}') + _NOUNZIP + _CHECKSUM_TAIL)


def old_checksum_pattern(org: str, repo: str, platform: Platform) -> re.Pattern[str]:
    return re.compile("(" + _any_version_url(org, repo, platform) + _NOUNZIP + _CHECKSUM_TAIL)


def find_version(text: str) -> str:
    match = VERSION_DECL.search(text)
    return match.group(1) if match else ""


def replace_version(text: str, version: str) -> str:
    """Rewrite the first ``version "vX.Y.Z"`` declaration, if any."""
    return VERSION_DECL.sub(lambda _: f'version "{version}"', text, count=1)


def replace_url(text: str, org: str, repo: str, platform: Platform, new_url: str) -> str:
    pattern = url_entry_pattern(org, repo, platform)
    return pattern.sub(lambda _: f'url "{new_url}", :using => :nounzip', text)


def replace_checksum(text: str, url: str, checksum: str) -> str:
    """Rewrite the sha256 directly below the ``url`` entry for ``url``.

    Anchors on the already rewritten url, so it has to run after
    :func:`replace_url`. A missing block leaves the text as it is.
    """
    pattern = checksum_pattern(url)
    return pattern.sub(lambda m: f"{m.group(1)}{checksum}{m.group(3)}", text)


def find_checksum(text: str, pattern: re.Pattern[str]) -> str:
    match = pattern.search(text)
    return match.group(2) if match else ""


def rewrite_formula(
    text: str,
    org: str,
    repo: str,
    version: str,
    checksums: Mapping[Platform, str],
) -> tuple[str, FormulaChanges]:
    """Apply the version, url and checksum rewrites for every platform.

    ``checksums`` maps each entry of :data:`PLATFORMS` to the digest of the
    binary published at its new release url. Returns the updated text and
    the before/after values seen in ``text`` and the result.
    """
    updated = replace_version(text, version)
    for platform in PLATFORMS:
        url = release_url(org, repo, version, platform)
        updated = replace_url(updated, org, repo, platform, url)
        updated = replace_checksum(updated, url, checksums[platform])

    changes = FormulaChanges(old_version=find_version(text), new_version=version)
    for platform in PLATFORMS:
        url = release_url(org, repo, version, platform)
        changes.platforms.append(
            PlatformChange(
                platform=platform,
                url=url,
                old_checksum=find_checksum(text, old_checksum_pattern(org, repo, platform)),
                new_checksum=find_checksum(updated, checksum_pattern(url)),
            )
        )
    return updated, changes
