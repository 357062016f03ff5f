# File: tests/test_dispatch.py
import functools

import pytest

from site_spider.dispatch import as_emitter, wants_origin


def one(value):
    pass


def two(value, page):
    pass


def two_with_default(value, page=None):
    pass


class Collector:
    def __init__(self):
        self.items = []

    def add(self, value):
        self.items.append(value)

    def __call__(self, value, page):
        self.items.append((value, page))


@pytest.mark.parametrize(
    "callback,expected",
    [
        (one, False),
        (two, True),
        (two_with_default, True),
        (lambda value: None, False),
        (lambda value, page: None, True),
        (lambda *args: None, False),
        (lambda value, *, page=None: None, False),
        (Collector().add, False),
        (Collector(), True),
        (functools.partial(two, "fixed"), False),
        ([].append, False),
    ],
)
def test_wants_origin(callback, expected):
    assert wants_origin(callback) is expected


def test_uninspectable_callable_is_value_only():
    class Opaque:
        __signature__ = object()

        def __call__(self, value, page):
            pass

    assert wants_origin(Opaque()) is False


def test_as_emitter_shapes():
    collector = Collector()
    as_emitter(collector.add)("value", "page")
    as_emitter(collector)("value", "page")
    as_emitter(collector.add, include_origin=False)("forced", "page")
    assert collector.items == ["value", ("value", "page"), "forced"]
