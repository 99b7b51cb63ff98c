"""build-cleaner - batch removal of build and cache artifacts.

Locates dependency caches, build outputs and temporary files beneath
project roots and removes them behind a protected-path safety net.
"""

__version__ = "0.1.0"
