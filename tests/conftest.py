import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FORMULA_TEMPLATE = """class Sbomasm < Formula
  desc "Assembler for SBOMs"
  homepage "https://github.com/interlynk-io/sbomasm"
  version "{version}"

  on_macos do
    if Hardware::CPU.arm?
      url "https://github.com/interlynk-io/sbomasm/releases/download/{version}/sbomasm-darwin-arm64", :using => :nounzip
      sha256 "{darwin_arm64}"
    else
      url "https://github.com/interlynk-io/sbomasm/releases/download/{version}/sbomasm-darwin-amd64", :using => :nounzip
      sha256 "{darwin_amd64}"
    end
  end

  on_linux do
    if Hardware::CPU.arm?
      url "https://github.com/interlynk-io/sbomasm/releases/download/{version}/sbomasm-linux-arm64", :using => :nounzip
      sha256 "{linux_arm64}"
    else
      url "https://github.com/interlynk-io/sbomasm/releases/download/{version}/sbomasm-linux-amd64", :using => :nounzip
      sha256 "{linux_amd64}"
    end
  end

  def install
    bin.install Dir["sbomasm-*"].first => "sbomasm"
  end
end
"""

OLD_CHECKSUMS = {
    "darwin_arm64": "a" * 64,
    "darwin_amd64": "b" * 64,
    "linux_arm64": "c" * 64,
    "linux_amd64": "d" * 64,
}


def render_formula(version="v1.0.3", **checksums):
    values = dict(OLD_CHECKSUMS)
    values.update(checksums)
    return FORMULA_TEMPLATE.format(version=version, **values)


class FakeResponse:
    def __init__(self, body, status=200):
        self._body = body
        self._offset = 0
        self.status = status

    def read(self, size=-1):
        if size is None or size < 0:
            size = len(self._body) - self._offset
        chunk = self._body[self._offset : self._offset + size]
        self._offset += len(chunk)
        return chunk

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeOpener:
    """Serves canned release bodies keyed by url and records every request."""

    def __init__(self, bodies=None, status=200):
        self.bodies = dict(bodies or {})
        self.status = status
        self.requested = []

    def __call__(self, url):
        self.requested.append(url)
        body = self.bodies.get(url, url.encode("utf-8"))
        return FakeResponse(body, status=self.status)


class PlainStyle:
    def old(self, text):
        return text

    def new(self, text):
        return text

    def heading(self, text):
        return text


@pytest.fixture
def formula_file(tmp_path):
    path = tmp_path / "sbomasm.rb"
    path.write_text(render_formula(), encoding="utf-8")
    return path


@pytest.fixture
def fake_opener():
    return FakeOpener()


@pytest.fixture
def plain_style():
    return PlainStyle()
