"""
Snap Service

Facade the editor talks to. Owns the region boundary index, the snap engine
and the edit point resolver, and assembles a SnapContext from its
collaborators on every call.

Design:
- Configuration comes from a SnapSettingsManager when one is given,
  otherwise from an explicit SnapConfiguration
- Region model changes invalidate the boundary index (the rebuild happens
  on the next query); the engine re-keys it when the enabled boundary kinds
  differ from the configuration
- Single-threaded: call from the thread that owns the collaborators
"""

from typing import Optional

from snapline.application.settings.snap_settings import SnapSettingsManager
from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.errors import SnapError
from snapline.features.snapping.domain.interfaces import (
    DisplayState,
    EditSurface,
    MarkerSource,
    RegionSource,
    TempoMap,
    TransportState,
)
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.timebase import SessionTimebase
from snapline.features.snapping.domain.types import (
    EditIgnoreOption,
    RoundMode,
    SnapPreference,
)

from .edit_point_resolver import EditPointResolver
from .region_boundary_index import RegionBoundaryIndex
from .snap_engine import SnapEngine


class SnapService:
    """
    Entry point for snapping and edit position queries.

    Example:
        service = SnapService(
            timebase=SessionTimebase(sample_rate=48000),
            display=StaticDisplayState(spp=100.0),
            regions=track_model,
            markers=locations,
            settings=SnapSettingsManager(JsonPreferencesRepository()),
        )
        snapped = service.snap(TimePosition.from_samples(50120))
    """

    def __init__(
        self,
        timebase: SessionTimebase,
        display: DisplayState,
        *,
        tempo_map: Optional[TempoMap] = None,
        markers: Optional[MarkerSource] = None,
        transport: Optional[TransportState] = None,
        regions: Optional[RegionSource] = None,
        surface: Optional[EditSurface] = None,
        settings: Optional[SnapSettingsManager] = None,
        config: Optional[SnapConfiguration] = None
    ):
        self._timebase = timebase
        self._display = display
        self._tempo_map = tempo_map
        self._markers = markers
        self._transport = transport
        self._surface = surface
        self._settings = settings
        self._config = config or SnapConfiguration()

        self._index = RegionBoundaryIndex(regions, self.configuration.region_boundary_kinds, tempo_map)
        self._engine = SnapEngine(self._index)
        self._resolver = EditPointResolver(self._engine)

        # Qt models announce structural changes; plain sources must call
        # invalidate_region_boundaries() themselves
        regions_changed = getattr(regions, "regions_changed", None)
        if regions_changed is not None:
            regions_changed.connect(self.invalidate_region_boundaries)

    # =========================================================================
    # Collaborators
    # =========================================================================

    @property
    def configuration(self) -> SnapConfiguration:
        if self._settings is not None:
            return self._settings.configuration()
        return self._config

    def set_configuration(self, config: SnapConfiguration) -> None:
        """Replace the configuration (stored through the settings manager when present)."""
        if self._settings is not None:
            self._settings.apply_configuration(config)
        else:
            self._config = config

    @property
    def timebase(self) -> SessionTimebase:
        return self._timebase

    def set_timebase(self, timebase: SessionTimebase) -> None:
        self._timebase = timebase

    def set_display(self, display: DisplayState) -> None:
        self._display = display

    def set_tempo_map(self, tempo_map: Optional[TempoMap]) -> None:
        self._tempo_map = tempo_map
        self._index.set_tempo_map(tempo_map)

    def set_markers(self, markers: Optional[MarkerSource]) -> None:
        self._markers = markers

    def set_transport(self, transport: Optional[TransportState]) -> None:
        self._transport = transport

    def set_surface(self, surface: Optional[EditSurface]) -> None:
        self._surface = surface

    @property
    def boundary_index(self) -> RegionBoundaryIndex:
        return self._index

    @property
    def engine(self) -> SnapEngine:
        return self._engine

    def context(self) -> SnapContext:
        """Snapshot of collaborator state for one resolution."""
        return SnapContext(
            timebase=self._timebase,
            display=self._display,
            tempo_map=self._tempo_map,
            markers=self._markers,
            transport=self._transport,
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def snap(
        self,
        pos: TimePosition,
        mode: RoundMode = RoundMode.NEAREST,
        pref: SnapPreference = SnapPreference.ANY_VISUAL,
        ensure_snap: bool = False
    ) -> TimePosition:
        """Snap a raw position with the current configuration."""
        return self._engine.resolve(pos, mode, pref, ensure_snap, self.configuration, self.context())

    def resolve_edit_position(
        self,
        ignore: EditIgnoreOption = EditIgnoreOption.NONE,
        from_context_menu: bool = False,
        from_outside_canvas: bool = False
    ) -> Optional[TimePosition]:
        """
        Position the next edit command acts at.

        Returns:
            The position, or None when the pointer is required but off the canvas

        Raises:
            SnapError: If no edit surface is attached
        """
        if self._surface is None:
            raise SnapError("Edit position requested without an edit surface")

        return self._resolver.resolve_edit_position(
            ignore,
            from_context_menu,
            from_outside_canvas,
            config=self.configuration,
            context=self.context(),
            surface=self._surface,
        )

    def invalidate_region_boundaries(self) -> None:
        self._index.invalidate()
