"""perseus: keeps a Satis repository manifest in sync with mirrored packages."""

__version__ = "0.1.0"
