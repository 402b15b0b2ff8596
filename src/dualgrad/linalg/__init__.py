"""
##############################################
Vectors and matrices (:mod:`dualgrad.linalg`)
##############################################

.. currentmodule:: dualgrad.linalg

This module provides the fixed-length containers that carry gradients and
Jacobian matrices.

Containers
==========

.. autosummary::
    :toctree: generated/

    Vector
    Matrix

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    DimensionMismatch

"""

from .vector import DimensionMismatch, Matrix, Vector

__all__ = ["DimensionMismatch", "Matrix", "Vector"]
