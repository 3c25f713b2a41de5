"""
gflaunch: bootstrap launcher for a local Griffon build system.

Resolves the framework's classpath, loads it into an isolated RootLoader
and runs named scripts through the framework's own entry points.
"""

__version__ = "0.3.0"
