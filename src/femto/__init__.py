"""Femto: a small ANSI terminal text editor engine.

The engine layers live in subpackages (``buffer``, ``input``, ``keymaps``,
``modes``, ``search``, ``actions``) and are hosted by
``femto.adapters.terminal``.
"""

__version__ = "0.0.1"

__all__ = ["__version__"]
