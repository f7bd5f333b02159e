"""Check AUR packages for upstream updates and bump them."""

__version__ = '0.5.0'
