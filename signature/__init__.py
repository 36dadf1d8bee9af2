"""
Signature feature.

Freehand stroke capture in reference-canvas units and rasterization of the
captured strokes (or of a stored PNG) into fixed-size images.
"""
