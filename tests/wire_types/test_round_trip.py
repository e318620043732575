from collections import OrderedDict, defaultdict, deque
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum, IntEnum, IntFlag
from typing import Any, NewType, Optional, TypeVar

from bincodec.exception import UnsupportedTypeError
from bincodec.types import Char, Float32, Int8, Int16, Int32, KeyValuePair, UInt8, UInt16, UInt32, UInt64
from bincodec.wire_types.classifier import WireCategory, classify, classify_value
from bincodec.wire_types.wire_type import WireType
from tests import unittest

T = TypeVar('T')


class Color(Enum):
    RED = 'red'
    GREEN = 'green'
    BLUE = 'blue'


class Level(IntEnum):
    LOW = 10
    HIGH = 20


class Permission(IntFlag):
    READ = 1
    WRITE = 2
    EXECUTE = 4


class Empty(Enum):
    pass



class Mode(str, Enum):
    READ = 'r'
    WRITE = 'w'


UserName = NewType('UserName', str)


@dataclass
class Account:
    owner: UserName
    nickname: Optional[UserName] = None


class Tag(str):
    pass


class Port(int):
    pass


class Ratio(float):
    pass


class Price(Decimal):
    pass


class WireTypeRoundTripTestCase(unittest.TestCase):
    def _run_test(self, type_: type[T], result: T) -> None:
        wire_type = self.codec.make_codec(type_)
        result_bytes = wire_type.to_bytes(result)
        result2 = wire_type.from_bytes(result_bytes)
        self.assertEqual(result, result2)

    def _assert_encoded(self, type_: Any, value: Any, expected_hex: str) -> None:
        self.assertEqual(self.codec.encode(value, type_).hex(), expected_hex)
        self.assertEqual(self.codec.decode(bytes.fromhex(expected_hex), type_), value)

    def test_bool(self):
        self._assert_encoded(bool, True, '01')
        self._assert_encoded(bool, False, '00')

    def test_sized_ints(self):
        self._assert_encoded(Int8, -1, 'ff')
        self._assert_encoded(UInt8, 255, 'ff')
        self._assert_encoded(Int16, -2, 'feff')
        self._assert_encoded(UInt16, 0x1234, '3412')
        self._assert_encoded(Int32, 42, '2a000000')
        self._assert_encoded(UInt32, 2**32 - 1, 'ffffffff')
        self._assert_encoded(UInt64, 1, '0100000000000000')

    def test_plain_int_is_64_bits(self):
        self._assert_encoded(int, -100, '9cffffffffffffff')
        self.assertEqual(self.codec.encode(1).hex(), '0100000000000000')

    def test_int_out_of_range(self):
        from bincodec.exception import EncodeError
        with self.assertRaises(EncodeError):
            self.codec.encode(256, UInt8)
        with self.assertRaises(EncodeError):
            self.codec.encode(-1, UInt32)

    def test_bool_is_not_an_int(self):
        from bincodec.exception import EncodeError
        with self.assertRaises(EncodeError):
            self.codec.encode(True, Int32)

    def test_floats(self):
        self._assert_encoded(float, 1.0, '000000000000f03f')
        self._assert_encoded(Float32, 1.0, '0000803f')
        self._run_test(float, -0.5)
        self._run_test(float, 1e300)

    def test_decimal(self):
        self._run_test(Decimal, Decimal('3.14159'))
        self._run_test(Decimal, Decimal('-1000000'))

    def test_char(self):
        self._assert_encoded(Char, 'A', '41000000')
        self._run_test(Char, '😀')

    def test_str(self):
        self._assert_encoded(str, 'hi', '020000006869')
        self._assert_encoded(str, '', '00000000')
        self._assert_encoded(str, None, 'ffffffff')
        self._run_test(str, 'áéíóúçãõ')

    def test_str_newtype(self):
        self._assert_encoded(UserName, UserName('bob'), '03000000626f62')
        self.assertRoundTrip(Account, Account(UserName('bob'), UserName('bobby')))
        self.assertRoundTrip(Account, Account(UserName('')))

    def test_scalar_subclasses_use_the_builtin_layout(self):
        self.assertEqual(classify(Tag), WireCategory.UTF8_STRING)
        self.assertEqual(classify_value(Port(1)), WireCategory.INTEGRAL)
        self.assertEqual(classify(Ratio), WireCategory.FLOAT64)
        self.assertEqual(classify(Price), WireCategory.DECIMAL)
        # a str mixin is still an enum
        self.assertEqual(classify(Mode), WireCategory.ENUM)

        self.assertEqual(self.codec.encode(Tag('hello'), Tag), self.codec.encode('hello', str))
        self.assertEqual(self.codec.encode(Port(8080), Port), self.codec.encode(8080, int))
        self.assertEqual(self.codec.encode(Ratio(0.5), Ratio), self.codec.encode(0.5, float))
        self.assertEqual(self.codec.encode(Price('1.5'), Price), self.codec.encode(Decimal('1.5'), Decimal))

    def test_scalar_subclasses_keep_their_class(self):
        for type_, value in [(Tag, Tag('hello')), (Port, Port(8080)), (Ratio, Ratio(0.5)), (Price, Price('1.5'))]:
            result = self.codec.decode(self.codec.encode(value), type_)
            self.assertIs(type(result), type_)
            self.assertEqual(result, value)
        self.assertIsNone(self.codec.decode(self.codec.encode(None, Tag), Tag))

    def test_datetime(self):
        self._run_test(datetime, datetime(2020, 5, 17, 8, 30, 15, 250))
        self._run_test(datetime, datetime(2020, 5, 17, 8, 30, tzinfo=timezone.utc))

    def test_bytes(self):
        self._assert_encoded(bytes, b'\x01\x02', '020000000102')
        self._assert_encoded(bytes, None, 'ffffffff')
        self._run_test(bytes, b'')

    def test_bytearray_keeps_its_class(self):
        result = self.codec.decode(self.codec.encode(bytearray(b'ab'), bytearray), bytearray)
        self.assertIsInstance(result, bytearray)
        self.assertEqual(result, bytearray(b'ab'))

    def test_enum_by_ordinal(self):
        self._assert_encoded(Color, Color.RED, '00000000')
        self._assert_encoded(Color, Color.BLUE, '02000000')

    def test_enum_by_value(self):
        self._assert_encoded(Level, Level.HIGH, '14000000')
        self._assert_encoded(Permission, Permission.READ | Permission.EXECUTE, '05000000')

    def test_enum_invalid(self):
        from bincodec.exception import InvalidDataError
        with self.assertRaises(InvalidDataError):
            self.codec.decode(bytes.fromhex('03000000'), Color)
        with self.assertRaises(InvalidDataError):
            self.codec.decode(bytes.fromhex('0b000000'), Level)

    def test_empty_enum_has_no_zero_value(self):
        self.assertIsNone(self.codec.make_codec(Empty).zero_value())

    def test_optional_scalar(self):
        self._assert_encoded(Optional[Int32], None, '00')
        self._assert_encoded(Optional[Int32], 5, '0105000000')
        self._assert_encoded(Optional[bool], False, '0100')

    def test_optional_reference_has_no_presence_byte(self):
        self._assert_encoded(Optional[str], None, 'ffffffff')
        self._assert_encoded(Optional[str], 'a', '0100000061')
        self.assertIs(self.codec.make_codec(Optional[str]), self.codec.make_codec(str))

    def test_scalar_null_is_an_error(self):
        from bincodec.exception import EncodeError
        with self.assertRaises(EncodeError):
            self.codec.encode(None, Int32)

    def test_list(self):
        self._assert_encoded(list[Int16], [1, 2], '0200000001000200')
        self._assert_encoded(list[Int16], [], '00000000')
        self._assert_encoded(list[Int16], None, 'ffffffff')

    def test_list_of_optionals(self):
        self._assert_encoded(list[Optional[Int16]], [1, None], '0200000001010000')
        self._assert_encoded(list[Optional[str]], ['a', None], '020000000100000061ffffffff')

    def test_nested_lists(self):
        self._run_test(list[list[str]], [['a', 'b'], [], ['c']])

    def test_collection_classes_are_kept(self):
        cases: list[tuple[Any, Any]] = [
            (tuple[Int32, ...], (1, 2, 3)),
            (set[str], {'a', 'b'}),
            (frozenset[UInt8], frozenset({1, 2})),
            (deque[bool], deque([True, False])),
        ]
        for type_, value in cases:
            with self.subTest(type_=type_):
                result = self.codec.decode(self.codec.encode(value, type_), type_)
                self.assertEqual(result, value)
                self.assertIs(type(result), type(value))

    def test_abstract_collections(self):
        result = self.codec.decode(self.codec.encode((1, 2), Sequence[Int8]), Sequence[Int8])
        self.assertEqual(result, [1, 2])
        result = self.codec.decode(self.codec.encode(frozenset({1}), Set[Int8]), Set[Int8])
        self.assertEqual(result, {1})
        self.assertIsInstance(result, set)

    def test_unparametrized_collection_cannot_decode(self):
        # the item type is unknown, items are encoded by their runtime class
        data = self.codec.encode(['a'], list)
        self.assertEqual(data.hex(), '010000000100000061')
        with self.assertRaises(UnsupportedTypeError):
            self.codec.decode(data, list)

    def test_heterogeneous_tuple_is_unsupported(self):
        with self.assertRaises(UnsupportedTypeError):
            self.codec.make_codec(tuple[int, str, bool])

    def test_dict(self):
        self._assert_encoded(dict[str, bool], {'a': True}, '01000000010000006101')
        self._assert_encoded(dict[str, bool], None, 'ffffffff')
        self._run_test(dict[Int32, list[str]], {1: ['x'], 2: []})

    def test_dict_keeps_insertion_order(self):
        value = {'b': 1, 'a': 2, 'c': 3}
        result = self.codec.decode(self.codec.encode(value, dict[str, Int8]), dict[str, Int8])
        self.assertEqual(list(result), ['b', 'a', 'c'])

    def test_mapping_classes(self):
        ordered = OrderedDict([('x', 1), ('y', 2)])
        result = self.codec.decode(self.codec.encode(ordered, OrderedDict[str, Int8]), OrderedDict[str, Int8])
        self.assertIs(type(result), OrderedDict)
        self.assertEqual(result, ordered)

        counts: defaultdict[str, int] = defaultdict(int, {'x': 3})
        result = self.codec.decode(self.codec.encode(counts, defaultdict[str, Int8]), defaultdict[str, Int8])
        self.assertIs(type(result), defaultdict)
        self.assertEqual(result, {'x': 3})

        result = self.codec.decode(self.codec.encode({'k': 1}, Mapping[str, Int8]), Mapping[str, Int8])
        self.assertEqual(result, {'k': 1})

    def test_key_value_pair(self):
        self._assert_encoded(KeyValuePair[UInt8, UInt8], KeyValuePair(1, 2), '0102')
        self._assert_encoded(tuple[UInt8, str], (1, 'a'), '010100000061')
        result = self.codec.decode(bytes.fromhex('0102'), KeyValuePair[UInt8, UInt8])
        self.assertIsInstance(result, KeyValuePair)

    def test_none_type(self):
        self._assert_encoded(None, None, 'ffffffff')

    def test_wire_types_are_cached(self):
        wire_type = self.codec.make_codec(list[str])
        self.assertIsInstance(wire_type, WireType)
        self.assertIs(wire_type, self.codec.make_codec(list[str]))
        self.assertTrue(wire_type.is_reference())
        self.assertFalse(self.codec.make_codec(Int32).is_reference())

    def test_unsupported_types(self):
        for type_ in (int | str, dict[str, int | bool]):
            with self.subTest(type_=type_):
                with self.assertRaises(UnsupportedTypeError):
                    self.codec.make_codec(type_)
