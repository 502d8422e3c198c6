"""Tests for repokit/domain/repositories/base.py."""

import pytest

from repokit.domain.repositories.base import Repository


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(Repository):
        async def find(self, key): return None
        async def all(self): return []
        # missing add, update, remove, select*, select_paged*

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def _full_methods():
    async def _none(self, *args, **kwargs): return None
    async def _list(self, *args, **kwargs): return []
    async def _true(self, *args, **kwargs): return True
    async def _same(self, entity): return entity
    def _lazy(self, *args, **kwargs): return None

    return {
        "find": _none,
        "find_with_include": _none,
        "all": _list,
        "all_with_include": _list,
        "add": _same,
        "update": _same,
        "remove": _true,
        "remove_entity": _true,
        "query": _lazy,
        "query_projection": _lazy,
        "query_by": _lazy,
        "select_by": _list,
        "select": _list,
        "select_paged": _none,
        "select_paged_by": _none,
    }


def test_repository_full_concrete_subclass_instantiates():
    _Full = type("_Full", (Repository,), _full_methods())
    assert _Full() is not None


@pytest.mark.parametrize(
    "missing",
    ["find_with_include", "all_with_include", "remove_entity", "query", "query_projection", "query_by"],
)
def test_include_removal_and_lazy_query_methods_are_abstract(missing):
    methods = _full_methods()
    del methods[missing]
    _Partial = type("_Partial", (Repository,), methods)

    assert missing in Repository.__abstractmethods__
    with pytest.raises(TypeError):
        _Partial()
