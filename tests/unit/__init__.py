"""
PySATL UQ
=========

Unit tests for orthogonal polynomial quadrature and mixed histogram
distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
