"""scenegeo — geometric reasoning core of a conversational 3D scene editor.

Subpackages:
  scene      Scene snapshot dataclasses, parsing and reference lookup.
  geometry   Polygon primitives shared by the room code.
  placement  Relation-driven placement and collision avoidance.
  rooms      Sketch-to-room extraction and room-relative queries.
"""

__version__ = "0.1.0"
