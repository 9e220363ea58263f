"""
.. This module acts as the top-level API documentation.

.. module: pyunitex

**pyunitex** parses, converts and simplifies physical unit expressions.

.. autosummary::
    :toctree: generated/

    units
    containers
"""

__version__ = "0.1.0"

import sys

# Written by Eric J. Whitney, November 2019.

# ======================================================================

assert sys.version_info >= (3, 10)
