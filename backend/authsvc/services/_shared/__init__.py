"""Cross-cutting service primitives: base class, errors, ports, durations."""
