"""Rate-limited routing tools over a metered directions provider."""
__version__ = "1.0.0"
