import contextlib
import contextvars
from typing import Literal, Self

type FloatingPolicy = Literal["ignore", "warn", "raise"]


class Context:
    """Create a new context.

    A context collects the settings used by the differential operators of
    :mod:`dualgrad.autodiff`. Each thread (and each asyncio task) sees its own
    current context.

    Parameters
    ----------
    allow_empty : bool, default=False
        If ``True``, differentiation with respect to zero variables is allowed and
        gradients are empty. Otherwise, constructing a dual of dimension 0 raises
        :exc:`ValueError`.
    floating : Literal["ignore", "warn", "raise"], default="ignore"
        How NumPy treats floating-point exceptions (division by zero, overflow,
        invalid operations) while a differentiated function is evaluated. With
        ``"ignore"``, infinities and NaNs propagate silently.
    """

    __slots__ = ("_allow_empty", "_floating")
    _allow_empty: bool
    _floating: FloatingPolicy

    def __init__(self, allow_empty: bool = False, floating: FloatingPolicy = "ignore"):
        if floating not in ("ignore", "warn", "raise"):
            raise ValueError(f"unknown floating-point policy: {floating!r}")

        self._allow_empty = allow_empty
        self._floating = floating

    @property
    def allow_empty(self) -> bool:
        return self._allow_empty

    @property
    def floating(self) -> FloatingPolicy:
        return self._floating

    def copy(self) -> Self:
        return self.__class__(self._allow_empty, self._floating)

    def __repr__(self):
        return (
            f"{type(self).__name__}(allow_empty={self._allow_empty!r}, "
            f"floating={self._floating!r})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dualgrad")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    allow_empty: bool | None = None,
    floating: FloatingPolicy | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> with localcontext(allow_empty=True) as ctx:
    ...     ctx.allow_empty
    True
    >>> getcontext().allow_empty
    False
    """
    if ctx is None:
        ctx = getcontext()

    if allow_empty is None:
        allow_empty = ctx.allow_empty

    if floating is None:
        floating = ctx.floating

    ctx = Context(allow_empty, floating)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
