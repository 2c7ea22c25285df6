"""Download release binaries and compute their SHA256 digests."""

from __future__ import annotations

import hashlib
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

CHUNK_SIZE = 1024 * 1024


class DownloadError(RuntimeError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"failed to download {url}: {reason}")
        self.url = url
        self.reason = reason


def compute_sha256(url: str, opener=urlopen, chunk_size: int = CHUNK_SIZE) -> str:
    """Stream ``url`` through SHA256 and return the lowercase hex digest."""
    digest = hashlib.sha256()
    try:
        with opener(url) as response:  # nosec B310: release URL built from args
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise DownloadError(url, f"status {status}")
            while True:
                chunk = response.read(chunk_size)
                if not chunk:
                    break
                digest.update(chunk)
    except HTTPError as exc:
        raise DownloadError(url, f"HTTP {exc.code}") from exc
    except URLError as exc:
        raise DownloadError(url, str(exc.reason)) from exc
    except OSError as exc:
        raise DownloadError(url, str(exc)) from exc
    return digest.hexdigest()


def fetch_checksums(urls, jobs: int = 1, opener=urlopen, on_start=None) -> list[str]:
    """Return the digest of every url, in the order given.

    With ``jobs`` above one the downloads run on a thread pool; results are
    still collected in input order and the first failure is raised.
    """
    urls = list(urls)

    def fetch(url):
        if on_start is not None:
            on_start(url)
        return compute_sha256(url, opener=opener)

    if jobs <= 1 or len(urls) <= 1:
        return [fetch(url) for url in urls]

    pool = ThreadPoolExecutor(max_workers=min(jobs, len(urls)))
    try:
        futures = [pool.submit(fetch, url) for url in urls]
        wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future.done() and future.exception() is not None:
                raise future.exception()
        digests = [future.result() for future in futures]
    except BaseException:
        # Downloads already in flight keep running; queued ones are dropped.
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return digests
