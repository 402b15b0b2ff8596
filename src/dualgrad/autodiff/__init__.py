"""
####################################################
Automatic differentiation (:mod:`dualgrad.autodiff`)
####################################################

.. currentmodule:: dualgrad.autodiff

This module provides forward-mode automatic differentiation. A single evaluation of
a function over :class:`Dual` numbers yields its value together with its whole
gradient or Jacobian matrix.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    diff
    diff_with_value
    grad
    grad_with_value
    jacobian
    jacobian_with_value
    jacobian_t
    jacobian_t_with_value
    check_grad

The same operators working on :class:`~dualgrad.linalg.Vector` and
:class:`~dualgrad.linalg.Matrix` are found in :mod:`dualgrad.autodiff.containers`.

Dual numbers
------------

.. autosummary::
    :toctree: generated/

    Dual
    make_dual
    make_dual_with_gradient
    make_active_dual
    seed_all_active
    lift
    primal
    gradient
    as_scalar_tuple
    as_vector_tuple

Context
-------

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

from .autodiff import (
    check_grad,
    diff,
    diff_with_value,
    grad,
    grad_with_value,
    jacobian,
    jacobian_t,
    jacobian_t_with_value,
    jacobian_with_value,
)
from .context import Context, getcontext, localcontext, setcontext
from .dual import (
    Dual,
    as_scalar_tuple,
    as_vector_tuple,
    gradient,
    lift,
    make_active_dual,
    make_dual,
    make_dual_with_gradient,
    primal,
    seed_all_active,
)
from . import containers

__all__ = [
    "check_grad",
    "containers",
    "diff",
    "diff_with_value",
    "grad",
    "grad_with_value",
    "jacobian",
    "jacobian_t",
    "jacobian_t_with_value",
    "jacobian_with_value",
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "Dual",
    "as_scalar_tuple",
    "as_vector_tuple",
    "gradient",
    "lift",
    "make_active_dual",
    "make_dual",
    "make_dual_with_gradient",
    "primal",
    "seed_all_active",
]
