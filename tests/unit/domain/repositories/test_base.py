"""Tests for src/domain/repositories/base.py."""

import inspect

import pytest

from src.domain.repositories.base import AsyncRepository, Repository

_READS = ("query", "get_first", "get_single", "get_by_id", "any", "get_list")
_WRITES = ("add", "add_range", "update", "update_range", "delete", "delete_range")


@pytest.mark.parametrize("interface", [AsyncRepository, Repository])
def test_interface_cannot_be_instantiated_directly(interface):
    with pytest.raises(TypeError):
        interface()  # type: ignore[abstract]


@pytest.mark.parametrize("interface", [AsyncRepository, Repository])
def test_interface_declares_full_surface(interface):
    assert interface.__abstractmethods__ == frozenset(_READS + _WRITES)


def test_partial_subclass_cannot_be_instantiated():
    class _Partial(AsyncRepository):
        def query(self, *args, **kwargs): return None
        async def get_first(self, *args, **kwargs): return None
        # writes missing

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_full_subclass_instantiates():
    namespace = {name: (lambda self, *a, **kw: None) for name in _READS + _WRITES}
    _Full = type("_Full", (Repository,), namespace)
    assert isinstance(_Full(), Repository)


def test_async_query_is_synchronous():
    assert not inspect.iscoroutinefunction(AsyncRepository.query)
    assert inspect.iscoroutinefunction(AsyncRepository.get_list)
