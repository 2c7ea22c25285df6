"""Update Homebrew formula versions, release URLs and checksums."""

__version__ = "0.1.0"
