"""Application layer: observables, the write queue and the study repository."""
