"""HTTP entry points for integer-only callers."""
