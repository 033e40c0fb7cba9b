"""Organization module infrastructure: in-process adapters and wiring."""
