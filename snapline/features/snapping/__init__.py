"""
Snapping feature.

Resolves raw timeline positions to grid lines, markers, the playhead and
region boundaries, and decides where an edit command takes effect.

Layers:
- domain/: value types, protocols, scale rounding
- application/: grid dispatch, boundary index, snap engine, edit point
  resolution and the SnapService facade
- infrastructure/: concrete tempo map, marker list, track model and
  collaborator state holders
"""
