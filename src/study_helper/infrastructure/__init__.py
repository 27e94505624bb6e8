"""Infrastructure layer: persistence, HTTP and dependency wiring."""
