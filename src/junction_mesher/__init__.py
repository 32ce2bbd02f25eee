"""
junction_mesher - procedural road intersection geometry.

Builds footpaths, curbs, gutters, mitered corners and road infill for a
rectangular intersection from four road-connection flags and a
cross-section profile, and emits the faces into a mesh sink.
"""

__version__ = "0.1.0"
