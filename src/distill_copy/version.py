"""Single source of truth for the distill-copy version string."""

__version__: str = "1.0.0"
