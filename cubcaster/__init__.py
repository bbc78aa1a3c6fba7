"""Grid raycasting shooter played on .cub maps with XPM textures."""

__version__ = "0.1.0"
__all__ = ["__version__"]