"""Local store, change tracking and remote fetcher for the study context."""
