"""Kernel: pure type-mapping and resolution logic (no I/O)."""
