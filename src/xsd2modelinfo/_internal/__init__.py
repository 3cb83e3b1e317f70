"""Internal helpers (I/O, serialization). Not part of the public API."""
