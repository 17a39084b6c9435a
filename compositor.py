"""Head-to-head matchup header compositor.

Turns one :class:`~matchups.MatchEvent` into a 1200×800 PNG: two team
gradients split down the middle, a black divider, and each team's logo
centred (and lifted slightly) in its half.

Drawing order is fixed: both gradients, the divider, then the logos in side
order once every logo load has finished.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from io import BytesIO
from typing import Callable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

import config
from logos import LogoLoad, load_logos, placeholder_logo
from matchups import MatchEvent, Team
from utils import RGB, hex_to_rgb, lerp_color, log_call

_RESAMPLE_LANCZOS = Image.Resampling.LANCZOS

HOME = 0
AWAY = 1

LogoLoader = Callable[[Sequence[str]], List[LogoLoad]]
CanvasFactory = Callable[[Tuple[int, int]], Image.Image]


# ─── Layout ──────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MatchupLayout:
    width: int = config.CANVAS_WIDTH
    height: int = config.CANVAS_HEIGHT
    logo_box: float = config.LOGO_BOX_SIZE
    logo_lift: float = config.LOGO_LIFT
    divider_width: float = config.DIVIDER_WIDTH

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def scaled(self, factor: float) -> "MatchupLayout":
        """Same proportions at a different physical size (used for previews)."""
        return replace(
            self,
            width=max(2, int(round(self.width * factor))),
            height=max(1, int(round(self.height * factor))),
            logo_box=self.logo_box * factor,
            logo_lift=self.logo_lift * factor,
            divider_width=self.divider_width * factor,
        )

    def half_box(self, side: int) -> Tuple[int, int, int, int]:
        half = int(round(self.half_width))
        if side == HOME:
            return (0, 0, half, self.height)
        return (half, 0, self.width, self.height)

    def divider_box(self) -> Tuple[int, int, int, int]:
        width = max(1, int(round(self.divider_width)))
        left = int(round(self.half_width - width / 2))
        return (left, 0, left + width, self.height)


DEFAULT_LAYOUT = MatchupLayout()


@dataclass(frozen=True)
class LogoPlacement:
    x: float
    y: float
    width: float
    height: float
    scale: float

    def box(self) -> Tuple[int, int, int, int]:
        """Integer (left, top, width, height) used when pasting."""
        return (
            int(round(self.x)),
            int(round(self.y)),
            max(1, int(round(self.width))),
            max(1, int(round(self.height))),
        )


def compute_logo_placement(
    image_width: float,
    image_height: float,
    side: int,
    layout: MatchupLayout = DEFAULT_LAYOUT,
) -> LogoPlacement:
    """Fit an image into the square logo box and centre it in its half.

    The logo sits ``layout.logo_lift`` pixels above true vertical centre.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid logo size {image_width}x{image_height}")

    scale = min(layout.logo_box / image_width, layout.logo_box / image_height)
    drawn_w = image_width * scale
    drawn_h = image_height * scale
    half = layout.half_width
    x = (half - drawn_w) / 2
    if side == AWAY:
        x += half
    y = (layout.height - drawn_h) / 2 - layout.logo_lift
    return LogoPlacement(x=x, y=y, width=drawn_w, height=drawn_h, scale=scale)


# ─── Colors ──────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TeamColors:
    edge: str
    core: str


def _default_core(side: int) -> str:
    if side == HOME:
        return config.DEFAULT_HOME_CORE_COLOR
    return config.DEFAULT_AWAY_CORE_COLOR


def resolve_team_colors(team: Team, side: int) -> TeamColors:
    """Gradient colors for one side, ``#``-prefixed.

    A missing secondary color falls back to black on both sides; a missing
    primary color falls back to black on the left and white on the right.
    """
    edge = team.secondary_color or config.DEFAULT_EDGE_COLOR
    core = team.primary_color or _default_core(side)
    return TeamColors(edge=f"#{edge}", core=f"#{core}")


def _color_rgb(value: str, fallback: str) -> RGB:
    rgb = hex_to_rgb(value)
    if rgb is None:
        logging.warning("Unparsable team color %r; using #%s", value, fallback)
        rgb = hex_to_rgb(fallback)
    return rgb  # type: ignore[return-value]


# ─── Background ──────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class GradientFill:
    """Left-to-right two-stop gradient over ``box``."""

    box: Tuple[int, int, int, int]
    start: str
    end: str


def background_fills(
    home: Team, away: Team, layout: MatchupLayout = DEFAULT_LAYOUT
) -> List[GradientFill]:
    fills = []
    for side, team in ((HOME, home), (AWAY, away)):
        colors = resolve_team_colors(team, side)
        fills.append(GradientFill(box=layout.half_box(side), start=colors.edge, end=colors.core))
    return fills


def fill_gradient(canvas: Image.Image, fill: GradientFill, side: int) -> None:
    x0, y0, x1, y1 = fill.box
    width = x1 - x0
    if width <= 0:
        return
    start = _color_rgb(fill.start, config.DEFAULT_EDGE_COLOR)
    end = _color_rgb(fill.end, _default_core(side))
    draw = ImageDraw.Draw(canvas)
    span = max(1, width - 1)
    for offset in range(width):
        color = lerp_color(start, end, offset / span)
        draw.line([(x0 + offset, y0), (x0 + offset, y1 - 1)], fill=color)


def draw_background(
    canvas: Image.Image, home: Team, away: Team, layout: MatchupLayout = DEFAULT_LAYOUT
) -> None:
    for side, fill in enumerate(background_fills(home, away, layout)):
        fill_gradient(canvas, fill, side)
    # Divider goes last so neither gradient covers it.
    left, top, right, bottom = layout.divider_box()
    ImageDraw.Draw(canvas).rectangle(
        (left, top, right - 1, bottom - 1), fill=config.DIVIDER_COLOR
    )


# ─── Logos ───────────────────────────────────────────────────────────────────
def draw_logo(
    canvas: Image.Image, logo: Image.Image, side: int, layout: MatchupLayout = DEFAULT_LAYOUT
) -> LogoPlacement:
    placement = compute_logo_placement(logo.width, logo.height, side, layout)
    x, y, w, h = placement.box()
    resized = logo.resize((w, h), _RESAMPLE_LANCZOS)
    if resized.mode == "RGBA":
        canvas.paste(resized, (x, y), resized)
    else:
        canvas.paste(resized.convert("RGB"), (x, y))
    return placement


# ─── Result ──────────────────────────────────────────────────────────────────
class CompositeStatus(enum.Enum):
    EXPORTED = "exported"
    MALFORMED_EVENT = "malformed_event"
    MISSING_DRAWING_CONTEXT = "missing_drawing_context"


@dataclass
class CompositeResult:
    status: CompositeStatus
    reason: str = ""
    filename: Optional[str] = None
    image: Optional[Image.Image] = None
    data: Optional[bytes] = None
    mimetype: str = "image/png"
    failed_logos: List[str] = field(default_factory=list)

    @property
    def exported(self) -> bool:
        return self.status is CompositeStatus.EXPORTED


def matchup_filename(home: Team, away: Team) -> str:
    return f"{home.abbreviation}_vs_{away.abbreviation}_matchup.png"


def validate_event(event: Optional[MatchEvent]) -> Optional[str]:
    """Return the reason *event* cannot be composited, or ``None``."""
    if event is None or not event.has_competition:
        return "event has no competition"
    if len(event.competitors) < 2:
        return f"event has {len(event.competitors)} competitor(s); need 2"
    return None


def _new_canvas(size: Tuple[int, int]) -> Image.Image:
    return Image.new("RGB", size, "black")


@log_call
def render_matchup(
    event: MatchEvent,
    *,
    layout: MatchupLayout = DEFAULT_LAYOUT,
    loader: LogoLoader = load_logos,
    canvas_factory: CanvasFactory = _new_canvas,
) -> CompositeResult:
    """Draw the header for *event* without encoding it.

    Malformed events and canvas allocation failures come back as skipped
    results; nothing is raised for them.
    """
    reason = validate_event(event)
    if reason is not None:
        logging.info("Skipping '%s': %s", getattr(event, "title", ""), reason)
        return CompositeResult(status=CompositeStatus.MALFORMED_EVENT, reason=reason)

    home, away = event.competitors[0], event.competitors[1]

    try:
        canvas = canvas_factory(layout.size)
    except (MemoryError, ValueError, OSError) as exc:
        logging.warning("Could not create %sx%s canvas: %s", layout.width, layout.height, exc)
        return CompositeResult(
            status=CompositeStatus.MISSING_DRAWING_CONTEXT,
            reason=f"render target unavailable: {exc}",
        )

    draw_background(canvas, home, away, layout)

    loads = loader([home.logo_reference, away.logo_reference])
    failed: List[str] = []
    for side, team in ((HOME, home), (AWAY, away)):
        load = loads[side] if side < len(loads) else None
        if load is not None and load.ok:
            draw_logo(canvas, load.image, side, layout)
            continue
        failed.append(team.abbreviation)
        draw_logo(canvas, placeholder_logo(int(round(layout.logo_box))), side, layout)

    return CompositeResult(
        status=CompositeStatus.EXPORTED,
        filename=matchup_filename(home, away),
        image=canvas,
        failed_logos=failed,
    )


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    try:
        image.save(buf, format="PNG")
        return buf.getvalue()
    finally:
        buf.close()


def compose_matchup(
    event: MatchEvent,
    *,
    loader: LogoLoader = load_logos,
    canvas_factory: CanvasFactory = _new_canvas,
) -> CompositeResult:
    """Render and PNG-encode the full-size header for *event*.

    The canvas is released once encoded; callers get the bytes in
    ``result.data`` and the download name in ``result.filename``.
    """
    result = render_matchup(event, loader=loader, canvas_factory=canvas_factory)
    if not result.exported:
        return result
    try:
        result.data = encode_png(result.image)
    finally:
        result.image.close()
        result.image = None
    logging.info(
        "Composed %s (%d bytes%s)",
        result.filename,
        len(result.data),
        f", placeholder for {', '.join(result.failed_logos)}" if result.failed_logos else "",
    )
    return result


def render_preview(
    event: MatchEvent,
    *,
    scale: float = config.PREVIEW_SCALE,
    loader: LogoLoader = load_logos,
) -> CompositeResult:
    """Smaller JPEG rendering of the same layout for on-page previews."""
    result = render_matchup(event, layout=DEFAULT_LAYOUT.scaled(scale), loader=loader)
    if not result.exported:
        return result
    buf = BytesIO()
    try:
        result.image.save(buf, format="JPEG", quality=85)
        result.data = buf.getvalue()
    finally:
        buf.close()
        result.image.close()
        result.image = None
    result.mimetype = "image/jpeg"
    result.filename = result.filename[: -len(".png")] + "_preview.jpg"
    return result
