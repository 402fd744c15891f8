"""Core services - dataset loading, flattening, the read-only store, sampling and export."""
