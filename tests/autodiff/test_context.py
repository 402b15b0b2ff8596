import copy
import threading

import pytest

from dualgrad.autodiff import (
    Context,
    getcontext,
    localcontext,
    make_dual,
    setcontext,
)


def test_default():
    ctx = Context()
    assert ctx.allow_empty is False
    assert ctx.floating == "ignore"
    assert repr(ctx) == "Context(allow_empty=False, floating='ignore')"

    with pytest.raises(ValueError):
        Context(floating="print")  # type: ignore


def test_localcontext():
    before = getcontext()

    with localcontext(allow_empty=True) as ctx:
        assert getcontext() is ctx
        assert ctx.allow_empty
        assert make_dual(1.0, 0).dim == 0

        with localcontext(floating="warn") as inner:
            assert inner.allow_empty and inner.floating == "warn"

    assert getcontext() is before


def test_setcontext():
    previous = getcontext()
    ctx = copy.copy(previous)

    try:
        setcontext(Context(allow_empty=True))
        assert getcontext().allow_empty
        assert not ctx.allow_empty
    finally:
        setcontext(previous)


def test_threads_do_not_share_context():
    seen = []

    def worker():
        seen.append(getcontext().allow_empty)

    with localcontext(allow_empty=True):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert seen == [False]
