"""
PySATL UQ
=========

Numerical core for uncertainty quantification: orthogonal polynomial families
with their Gauss quadrature rules, and mixed discrete/continuous histogram
distributions with alias-method sampling.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .polynomials import *
from .polynomials import __all__ as _poly_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-uq")
__all__ = [
    "__version__",
    *_config_all,
    *_distr_all,
    *_exceptions_all,
    *_poly_all,
    *_types_all,
]

del _config_all
del _distr_all
del _exceptions_all
del _poly_all
del _types_all
