"""CLI package.

The ``cli`` sub-package contains the Click application and all command
implementations.  It is the only place that reads the environment or
the running platform; everything below it receives those facts as
explicit arguments.
"""
from __future__ import annotations
