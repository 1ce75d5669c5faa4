"""
Callout body sizing.
Pure functions - no side effects, no KiCad imports.
"""
from dataclasses import replace
from typing import Tuple
from .models import (
    CalloutContent,
    CalloutSize,
    CalloutStyle,
    Platform,
    Viewport,
    VIEWPORT_LEADER_MARGINS,
)


def _content_bounds(
    style_min: float,
    style_max: float,
    viewport_extent: float,
    style: CalloutStyle
) -> Tuple[float, float]:
    """
    Calculate the (min, max) content-area extent along one axis.

    The content area is the body box without the corner-radius padding.

    Args:
        style_min: Style minimum for this axis
        style_max: Style maximum for this axis
        viewport_extent: Viewport width or height
        style: Callout style

    Returns:
        Tuple of (minimum, maximum), with minimum never above maximum
    """
    padding = 2 * style.corner_radius

    maximum = style_max - padding

    # Keep callout + leader + a visible margin of context inside the viewport
    available = (
        viewport_extent
        - style.border_width
        - padding
        - VIEWPORT_LEADER_MARGINS * style.leader_height
    )
    maximum = max(0.0, min(maximum, available))

    minimum = max(0.0, min(style_min, maximum))
    return minimum, maximum


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(value, maximum))


def resolve_callout_size(
    content: CalloutContent,
    style: CalloutStyle,
    viewport: Viewport
) -> CalloutSize:
    """
    Derive the body box size from the content's natural size and the style.

    Unmeasured content (empty title or detail, zero or negative natural size)
    collapses to the minimum size. On iOS the width gets two extra leader
    widths of padding to match the native layout.

    Args:
        content: Natural size of the callout content
        style: Callout style (min/max dimensions, corner radius, platform)
        viewport: Containing surface extent

    Returns:
        CalloutSize with the rect size and the rect-level bounds it satisfies
    """
    padding = 2 * style.corner_radius

    min_w, max_w = _content_bounds(style.min_width, style.max_width, viewport.width, style)
    min_h, max_h = _content_bounds(style.min_height, style.max_height, viewport.height, style)

    if content.is_measured:
        natural_width = content.natural_width
        if style.platform == Platform.IOS:
            natural_width += 2 * style.leader_width

        content_width = _clamp(natural_width, min_w, max_w)
        content_height = _clamp(content.natural_height, min_h, max_h)
    else:
        content_width = min_w
        content_height = min_h

    # Corner padding alone can exceed a small style maximum
    rect_max_w = min(max_w + padding, style.max_width)
    rect_max_h = min(max_h + padding, style.max_height)

    return CalloutSize(
        rect_width=min(content_width + padding, rect_max_w),
        rect_height=min(content_height + padding, rect_max_h),
        min_width=min(min_w + padding, rect_max_w),
        max_width=rect_max_w,
        min_height=min(min_h + padding, rect_max_h),
        max_height=rect_max_h,
    )


def scale_style(style: CalloutStyle, scale_factor: float) -> CalloutStyle:
    """
    Create a new style with all lengths scaled by factor.

    Args:
        style: Original style
        scale_factor: Multiplier to apply to all lengths

    Returns:
        New CalloutStyle with scaled lengths
    """
    return replace(
        style,
        border_width=style.border_width * scale_factor,
        corner_radius=style.corner_radius * scale_factor,
        min_width=style.min_width * scale_factor,
        max_width=style.max_width * scale_factor,
        min_height=style.min_height * scale_factor,
        max_height=style.max_height * scale_factor,
        leader_width=style.leader_width * scale_factor,
        leader_height=style.leader_height * scale_factor,
        edge_buffer=style.edge_buffer * scale_factor,
        # NOTE: Screen offsets are host coordinates and stay unscaled, as do
        # positions, platform and colours.
    )
