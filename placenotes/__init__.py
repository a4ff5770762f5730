"""PlaceNotes: sticky notes on an unbounded, pannable canvas."""

__version__ = "1.0.0"
__app_id__ = "io.github.placenotes.PlaceNotes"
