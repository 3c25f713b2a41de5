"""
Build-tool integration: the ``griffon`` task and the project it runs in.
"""

from .griffon_task import GriffonTask
from .project import Project

__all__ = [
    "GriffonTask",
    "Project",
]
