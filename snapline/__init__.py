"""
snapline
========

Snap resolution and edit-point core for timeline editing surfaces.

Turns an imprecise timeline position (pointer, click, command) into the
exact position an edit should happen at: grid lines, markers, the playhead
and region boundaries all compete, the nearest one wins and a magnetic
threshold decides whether the snap is visually justified.

Package Structure
-----------------
- features/snapping/domain/          - TimePosition, enums, rounding, protocols
- features/snapping/application/     - Grid dispatcher, boundary index, engine,
                                       edit-point resolver, SnapService facade
- features/snapping/infrastructure/  - Tempo map, marker list, track model,
                                       static display/transport/surface state
- application/settings/              - Settings schema, registry and manager
- infrastructure/persistence/file/   - JSON preferences repository
- utils/                             - Logging and paths

Import Examples
---------------
    from snapline.features.snapping.application import SnapService
    from snapline.features.snapping.domain import TimePosition, RoundMode
"""

__version__ = "0.1.0"
