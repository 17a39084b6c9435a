"""Team logo loading for the matchup compositor.

Every compositing call starts its own batch of loads and waits on all of
them; a load that fails still reports back so the wait always completes.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, List, Optional, Sequence, Tuple

import requests
from PIL import Image, ImageDraw, UnidentifiedImageError

from config import LOGO_TIMEOUT
from services.http_client import request_bytes


@dataclass
class LogoLoad:
    """Outcome of one fetch-and-decode."""

    reference: str
    image: Optional[Image.Image] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None


LogoFetcher = Callable[[str, float], LogoLoad]


def _decode_logo(data: bytes) -> Image.Image:
    with Image.open(BytesIO(data)) as img:
        has_transparency = img.mode in {"RGBA", "LA"} or (
            img.mode == "P" and "transparency" in img.info
        )
        img.load()
        if has_transparency or img.mode != "RGB":
            return img.convert("RGBA")
        return img.convert("RGB")


def fetch_logo(reference: str, timeout: float = LOGO_TIMEOUT) -> LogoLoad:
    """Download and decode one logo; failures are returned, not raised."""

    if not reference:
        return LogoLoad(reference=reference, error="missing logo reference")
    try:
        data = request_bytes(reference, timeout=timeout)
        image = _decode_logo(data)
    except requests.RequestException as exc:
        return LogoLoad(reference=reference, error=f"download failed: {exc}")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        return LogoLoad(reference=reference, error=f"decode failed: {exc}")
    if not image.width or not image.height:
        return LogoLoad(reference=reference, error="empty image")
    return LogoLoad(reference=reference, image=image)


def load_logos(
    references: Sequence[str],
    *,
    timeout: float = LOGO_TIMEOUT,
    fetcher: LogoFetcher = fetch_logo,
) -> List[LogoLoad]:
    """Load every reference concurrently and wait for all of them.

    Results come back in the order of *references*, whatever order the loads
    finish in. A load that has not finished within *timeout* seconds (plus a
    small grace period for the fetcher's own timeout) is reported as failed.
    """

    if not references:
        return []

    pool = ThreadPoolExecutor(
        max_workers=len(references), thread_name_prefix="logo-load"
    )
    try:
        futures: List[Tuple[str, Future]] = [
            (ref, pool.submit(fetcher, ref, timeout)) for ref in references
        ]
        done, _pending = wait(
            [future for _ref, future in futures], timeout=timeout + 1
        )
        results: List[LogoLoad] = []
        for ref, future in futures:
            if future not in done:
                future.cancel()
                results.append(LogoLoad(reference=ref, error="timed out"))
                continue
            exc = future.exception()
            if exc is not None:
                results.append(LogoLoad(reference=ref, error=f"loader error: {exc}"))
                continue
            results.append(future.result())
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    for result in results:
        if not result.ok:
            logging.warning("Logo load failed '%s': %s", result.reference, result.error)
    return results


def placeholder_logo(size: int, outline: Tuple[int, int, int] = (255, 255, 255)) -> Image.Image:
    """Transparent square with an outlined circle, drawn in place of a missing logo."""

    size = max(8, int(size))
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    width = max(2, size // 60)
    inset = width + 1
    d.ellipse((inset, inset, size - inset, size - inset), outline=outline + (200,), width=width)
    return img
