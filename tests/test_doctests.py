import doctest
import importlib

import pytest

MODULES_WITH_DOCTESTS = [
    'bincodec.codec',
    'bincodec.introspection.introspector',
    'bincodec.introspection.resolver',
    'bincodec.serialization.compound_encoding.collection',
    'bincodec.serialization.compound_encoding.mapping',
    'bincodec.serialization.compound_encoding.optional',
    'bincodec.serialization.compound_encoding.pair',
    'bincodec.serialization.encoding.bool',
    'bincodec.serialization.encoding.bytes',
    'bincodec.serialization.encoding.char',
    'bincodec.serialization.encoding.datetime',
    'bincodec.serialization.encoding.decimal',
    'bincodec.serialization.encoding.float',
    'bincodec.serialization.encoding.int',
    'bincodec.serialization.encoding.length',
    'bincodec.serialization.encoding.utf8',
    'bincodec.types',
    'bincodec.utils.typing',
    'bincodec.utils.yaml',
    'bincodec.wire_types.classifier',
    'bincodec.wire_types.composite_wire_type',
    'bincodec.wire_types.diagnostics',
    'bincodec.wire_types.enum_wire_type',
    'bincodec.wire_types.optional_wire_type',
    'bincodec.wire_types.polymorphic_wire_type',
    'bincodec.wire_types.sized_int_wire_type',
]


@pytest.mark.parametrize('module_name', MODULES_WITH_DOCTESTS)
def test_doctests(module_name: str) -> None:
    module = importlib.import_module(module_name)
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS)
    assert result.attempted > 0
    assert result.failed == 0
