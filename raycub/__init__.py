"""Multi-level raycasting engine with XPM textures, doors and floors."""

__version__ = "0.1.0"
__all__ = ["__version__"]