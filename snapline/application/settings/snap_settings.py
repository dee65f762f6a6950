"""
Snap Settings

Persisted user preferences for snapping, and their manager.

Enums are stored by name so that the preferences file stays readable and
survives enum value changes. `to_configuration()` turns the stored form
into the immutable SnapConfiguration the snapping core consumes.
"""
from dataclasses import dataclass
from typing import Optional

from snapline.features.snapping.domain.configuration import SnapConfiguration
from snapline.features.snapping.domain.types import EditPoint, GridType, SnapTarget

from .base_settings import BaseSettings, BaseSettingsManager, validated_field
from .settings_registry import register_settings

GRID_TYPE_NAMES = [g.name for g in GridType]
SNAP_TARGET_NAMES = [t.name for t in SnapTarget]
EDIT_POINT_NAMES = [e.name for e in EditPoint]

MIN_SNAP_THRESHOLD_PX = 1
MAX_SNAP_THRESHOLD_PX = 500


@register_settings("snapping")
@dataclass
class SnapSettings(BaseSettings):
    """Stored snapping preferences."""
    grid_type: str = validated_field("NONE", choices=GRID_TYPE_NAMES, allow_none=False)
    musical_grid: Optional[bool] = None
    snap_target: str = validated_field("BOTH", choices=SNAP_TARGET_NAMES, allow_none=False)
    snap_to_marks: bool = True
    snap_to_playhead: bool = False
    snap_to_region_start: bool = True
    snap_to_region_end: bool = True
    snap_to_region_sync: bool = True
    snap_threshold_px: int = validated_field(
        25, min_value=MIN_SNAP_THRESHOLD_PX, max_value=MAX_SNAP_THRESHOLD_PX, allow_none=False
    )
    snap_threshold_max_seconds: Optional[float] = validated_field(None, min_value=0.0)
    edit_point: str = validated_field("MOUSE", choices=EDIT_POINT_NAMES, allow_none=False)

    def to_configuration(self) -> SnapConfiguration:
        """
        Build the immutable configuration.

        Raises:
            ValueError: If the settings do not validate
        """
        result = self.validate()
        if not result.valid:
            raise ValueError(f"Invalid snap settings: {'; '.join(result.errors)}")

        return SnapConfiguration(
            grid_type=GridType[self.grid_type],
            musical_grid=self.musical_grid,
            snap_target=SnapTarget[self.snap_target],
            snap_to_marks=self.snap_to_marks,
            snap_to_playhead=self.snap_to_playhead,
            snap_to_region_start=self.snap_to_region_start,
            snap_to_region_end=self.snap_to_region_end,
            snap_to_region_sync=self.snap_to_region_sync,
            snap_threshold_px=self.snap_threshold_px,
            snap_threshold_max_seconds=self.snap_threshold_max_seconds,
            edit_point=EditPoint[self.edit_point],
        )

    @classmethod
    def from_configuration(cls, config: SnapConfiguration) -> 'SnapSettings':
        return cls(
            grid_type=config.grid_type.name,
            musical_grid=config.musical_grid,
            snap_target=config.snap_target.name,
            snap_to_marks=config.snap_to_marks,
            snap_to_playhead=config.snap_to_playhead,
            snap_to_region_start=config.snap_to_region_start,
            snap_to_region_end=config.snap_to_region_end,
            snap_to_region_sync=config.snap_to_region_sync,
            snap_threshold_px=config.snap_threshold_px,
            snap_threshold_max_seconds=config.snap_threshold_max_seconds,
            edit_point=config.edit_point.name,
        )


class SnapSettingsManager(BaseSettingsManager):
    """
    Snap settings with typed accessors.

    Example:
        manager = SnapSettingsManager(JsonPreferencesRepository())
        manager.grid_type = GridType.BEAT
        config = manager.configuration()
    """

    NAMESPACE = "snapping"

    def configuration(self) -> SnapConfiguration:
        return self._settings.to_configuration()

    def apply_configuration(self, config: SnapConfiguration) -> None:
        """Store every field of a configuration, emitting one change per modified field."""
        stored = SnapSettings.from_configuration(config)
        for key, value in stored.to_dict().items():
            self.set(key, value)

    @property
    def grid_type(self) -> GridType:
        return GridType[self._settings.grid_type]

    @grid_type.setter
    def grid_type(self, value: GridType):
        self.set("grid_type", value.name)

    @property
    def snap_target(self) -> SnapTarget:
        return SnapTarget[self._settings.snap_target]

    @snap_target.setter
    def snap_target(self, value: SnapTarget):
        self.set("snap_target", value.name)

    @property
    def edit_point(self) -> EditPoint:
        return EditPoint[self._settings.edit_point]

    @edit_point.setter
    def edit_point(self, value: EditPoint):
        self.set("edit_point", value.name)

    @property
    def snap_threshold_px(self) -> int:
        return self._settings.snap_threshold_px

    @snap_threshold_px.setter
    def snap_threshold_px(self, value: int):
        self.set_validated("snap_threshold_px", value)

    @property
    def snap_to_marks(self) -> bool:
        return self._settings.snap_to_marks

    @snap_to_marks.setter
    def snap_to_marks(self, value: bool):
        self.set("snap_to_marks", value)

    @property
    def snap_to_playhead(self) -> bool:
        return self._settings.snap_to_playhead

    @snap_to_playhead.setter
    def snap_to_playhead(self, value: bool):
        self.set("snap_to_playhead", value)
