"""
Procedural intersection geometry.

Modules, leaf first:
- topology: sides, corners, junction classification
- corner_math: corner apex placement
- corners / footpaths / intersection_model: the immutable model
- extrusion / placement: local construction and quarter-turn placement
- corner_builder / footpath_builder / road_fill_builder: face emission
- generator: validated end-to-end build and the parameter-driven wrapper
"""
