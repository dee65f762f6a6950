"""
Edit Point Resolver

Decides which raw input (mouse, playhead or a selected marker) is
authoritative for a command and returns the position the edit happens at.

Resolution runs two ordered rule lists:

- Preference rules rewrite the configured EditPoint (ignore options,
  pointer outside the canvas)
- Override rules may short-circuit with a concrete position (hovered
  marker, context-menu click)

Then the final EditPoint is resolved. Mouse positions go through the snap
engine; every other source is already exact.

"No pointer position" is returned as None, never raised: callers abort the
command.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.interfaces import EditSurface
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.types import (
    EditIgnoreOption,
    EditPoint,
    RoundMode,
    SnapPreference,
)
from snapline.utils.message import Log

from .snap_engine import SnapEngine


@dataclass(frozen=True)
class EditPositionRequest:
    """
    Caller-side options for one edit position lookup.

    Attributes:
        ignore: Command-local override of the edit point preference
        from_context_menu: Command was invoked from a canvas context menu
        from_outside_canvas: Command was invoked from outside the canvas
            (menu bar, keyboard shortcut in another widget)
    """
    ignore: EditIgnoreOption = EditIgnoreOption.NONE
    from_context_menu: bool = False
    from_outside_canvas: bool = False


PreferenceRule = Callable[[EditPositionRequest, EditPoint], EditPoint]
OverrideRule = Callable[[EditPositionRequest, EditPoint, EditSurface], Optional[TimePosition]]


# =============================================================================
# Preference rules (evaluated in order, each may rewrite the edit point)
# =============================================================================

def ignore_playhead_rule(request: EditPositionRequest, edit_point: EditPoint) -> EditPoint:
    if request.ignore is EditIgnoreOption.IGNORE_PLAYHEAD and edit_point is EditPoint.PLAYHEAD:
        return EditPoint.SELECTED_MARKER
    return edit_point


def ignore_mouse_rule(request: EditPositionRequest, edit_point: EditPoint) -> EditPoint:
    if request.ignore is EditIgnoreOption.IGNORE_MOUSE and edit_point is EditPoint.MOUSE:
        return EditPoint.PLAYHEAD
    return edit_point


def outside_canvas_rule(request: EditPositionRequest, edit_point: EditPoint) -> EditPoint:
    # the pointer position means nothing when the command came from elsewhere
    if request.from_outside_canvas and edit_point is EditPoint.MOUSE:
        return EditPoint.PLAYHEAD
    return edit_point


DEFAULT_PREFERENCE_RULES: Sequence[PreferenceRule] = (
    ignore_playhead_rule,
    ignore_mouse_rule,
    outside_canvas_rule,
)


# =============================================================================
# Override rules (evaluated in order, first position wins)
# =============================================================================

def entered_marker_rule(
    request: EditPositionRequest,
    edit_point: EditPoint,
    surface: EditSurface
) -> Optional[TimePosition]:
    """A marker under the cursor wins over every other source."""
    return surface.entered_marker_position()


def context_menu_rule(
    request: EditPositionRequest,
    edit_point: EditPoint,
    surface: EditSurface
) -> Optional[TimePosition]:
    """Context-menu commands use the click that opened the menu, unsnapped."""
    if not (request.from_context_menu and edit_point is EditPoint.MOUSE):
        return None
    click = surface.context_click_sample()
    if click is None:
        return None
    return TimePosition.from_samples(click)


DEFAULT_OVERRIDE_RULES: Sequence[OverrideRule] = (
    entered_marker_rule,
    context_menu_rule,
)


class EditPointResolver:
    """
    Resolves the authoritative edit position for a command.

    Example:
        resolver = EditPointResolver(engine)
        where = resolver.resolve_edit_position(
            config=config, context=context, surface=surface,
            ignore=EditIgnoreOption.IGNORE_MOUSE,
        )
        if where is None:
            return  # no pointer position, abort the command
    """

    def __init__(
        self,
        engine: SnapEngine,
        preference_rules: Sequence[PreferenceRule] = DEFAULT_PREFERENCE_RULES,
        override_rules: Sequence[OverrideRule] = DEFAULT_OVERRIDE_RULES
    ):
        self._engine = engine
        self._preference_rules = tuple(preference_rules)
        self._override_rules = tuple(override_rules)

    def effective_edit_point(self, preferred: EditPoint, request: EditPositionRequest) -> EditPoint:
        """Apply the preference rules to the configured edit point."""
        edit_point = preferred
        for rule in self._preference_rules:
            edit_point = rule(request, edit_point)
        return edit_point

    def resolve_edit_position(
        self,
        ignore: EditIgnoreOption = EditIgnoreOption.NONE,
        from_context_menu: bool = False,
        from_outside_canvas: bool = False,
        *,
        config: SnapConfiguration,
        context: SnapContext,
        surface: EditSurface
    ) -> Optional[TimePosition]:
        """
        Position the next edit happens at.

        Returns:
            The resolved position, or None when the mouse is authoritative
            but the pointer is not over the canvas
        """
        request = EditPositionRequest(ignore, from_context_menu, from_outside_canvas)
        edit_point = self.effective_edit_point(config.edit_point, request)

        for rule in self._override_rules:
            where = rule(request, edit_point, surface)
            if where is not None:
                Log.debug(f"EditPointResolver: {rule.__name__} -> {where}")
                return where

        if edit_point is EditPoint.PLAYHEAD:
            return self._playhead_position(context, surface)

        if edit_point is EditPoint.SELECTED_MARKER:
            where = self._selected_marker_position(surface)
            if where is not None:
                return where
            # no selected marker: fall through to the mouse

        return self._mouse_position(config, context, surface)

    # =========================================================================
    # Sources
    # =========================================================================

    def _playhead_position(self, context: SnapContext, surface: EditSurface) -> TimePosition:
        if surface.dragging_playhead() or context.transport is None:
            # a dragged playhead is already snapped by the drag
            where = TimePosition.from_samples(surface.playhead_visual_sample())
        else:
            where = TimePosition.from_samples(context.transport.audible_sample())
        Log.debug(f"EditPointResolver: use playhead @ {where}")
        return where

    def _selected_marker_position(self, surface: EditSurface) -> Optional[TimePosition]:
        selected = surface.first_selected_marker()
        if selected is None:
            return None
        location, is_start = selected
        where = location.start if is_start else location.end
        Log.debug(f"EditPointResolver: use selected marker '{location.name}' @ {where}")
        return where

    def _mouse_position(
        self,
        config: SnapConfiguration,
        context: SnapContext,
        surface: EditSurface
    ) -> Optional[TimePosition]:
        pointer = surface.pointer_sample()
        if pointer is None:
            Log.debug("EditPointResolver: no pointer position over the canvas")
            return None

        raw = TimePosition.from_samples(pointer)
        where = self._engine.resolve(
            raw, RoundMode.NEAREST, SnapPreference.ANY_VISUAL, False, config, context
        )
        Log.debug(f"EditPointResolver: use mouse @ {where}")
        return where
