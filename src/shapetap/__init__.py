"""Shapetap - Vector shapes with stroke-aware hit testing.

Shapetap generates random 2-D vector shapes (rectangles, ellipses, house
outlines and spirals), keeps them in an ordered collection with a single
selection, and hit tests taps against each shape's stroked outline widened
to a comfortable minimum width instead of its fill or bounding box.

Example:
    $ shapetap generate --count 5 --seed 7

This prints five reproducible shapes with their kind, colour and bounds.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
