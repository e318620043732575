from unittest.mock import patch

import pytest

from bincodec.exception import UnresolvedTypeError
from bincodec.introspection.resolver import TypeRegistry, default_name_of


class Circle:
    class Inner:
        pass


class Square:
    pass


def test_default_name() -> None:
    assert default_name_of(Circle) == f'{__name__}.Circle'
    assert default_name_of(Circle.Inner) == f'{__name__}.Circle.Inner'
    assert TypeRegistry().name_of(Square) == f'{__name__}.Square'


def test_register() -> None:
    registry = TypeRegistry()
    assert registry.register(Circle) is Circle
    assert default_name_of(Circle) in registry
    assert registry.resolve(default_name_of(Circle)) is Circle


def test_register_as_decorator() -> None:
    registry = TypeRegistry()

    @registry.register
    class First:
        pass

    @registry.register(name='second')
    class Second:
        pass

    assert registry.name_of(First) == default_name_of(First)
    assert registry.name_of(Second) == 'second'
    assert registry.resolve('second') is Second


def test_register_conflicts() -> None:
    registry = TypeRegistry()
    registry.register(Circle, name='shape')
    registry.register(Circle, name='shape')
    with pytest.raises(ValueError):
        registry.register(Square, name='shape')
    with pytest.raises(ValueError):
        registry.register(Circle, name='circle')
    with pytest.raises(TypeError):
        registry.register(Circle(), name='instance')  # type: ignore[call-overload]


def test_resolve_unknown() -> None:
    registry = TypeRegistry()
    with pytest.raises(UnresolvedTypeError) as excinfo:
        registry.resolve(default_name_of(Square))
    assert excinfo.value.type_name == default_name_of(Square)


def test_resolve_by_import() -> None:
    registry = TypeRegistry()
    assert registry.resolve(default_name_of(Circle.Inner), by_import=True) is Circle.Inner
    with pytest.raises(UnresolvedTypeError):
        registry.resolve(f'{__name__}.Missing', by_import=True)
    with pytest.raises(UnresolvedTypeError):
        registry.resolve('no_such_module_anywhere.Thing', by_import=True)
    with pytest.raises(UnresolvedTypeError):
        # a function is not a class
        registry.resolve(f'{__name__}.test_resolve_by_import', by_import=True)


@pytest.mark.parametrize('name', ['.x', 'x.', 'a..b', '', 'os.path join'])
def test_resolve_malformed_name(name: str) -> None:
    registry = TypeRegistry()
    with pytest.raises(UnresolvedTypeError) as excinfo:
        registry.resolve(name, by_import=True)
    assert excinfo.value.type_name == name


def test_resolve_module_failing_on_import() -> None:
    registry = TypeRegistry()
    with patch('bincodec.introspection.resolver.importlib.import_module', side_effect=RuntimeError('boom')):
        with pytest.raises(UnresolvedTypeError) as excinfo:
            registry.resolve('broken.Thing', by_import=True)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
