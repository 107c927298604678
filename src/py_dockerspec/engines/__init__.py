"""py_dockerspec.engines - Test engine contract and base class.

Concrete engines register themselves when imported, so they are not
imported here. Use ``import py_dockerspec.engines.command`` to enable the
command engine.
"""

from py_dockerspec.engines.base import BaseEngine
from py_dockerspec.engines.protocol import Engine

__all__ = ["BaseEngine", "Engine"]
