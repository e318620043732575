from dataclasses import dataclass, field
from typing import Generic, NamedTuple, Optional, TypeVar

from structlog.testing import capture_logs

from bincodec.exception import InvalidDataError, TruncatedError, UnsupportedTypeError
from bincodec.introspection.introspector import transient
from bincodec.introspection.member import Member, SerializationDescriptor
from bincodec.types import Int16, Int32, UInt8
from bincodec.wire_types.diagnostics import SkippedMember
from tests import unittest

T = TypeVar('T')


@dataclass
class PointV1:
    a: Int32


@dataclass
class PointV2:
    a: Int32
    b: Int32


@dataclass
class PointShortA:
    a: Int16


@dataclass
class PointStrA:
    a: str


@dataclass
class Defaults:
    a: Int32
    label: str = 'default'
    tags: list[str] = field(default_factory=list)
    count: Int32 = 7


@dataclass
class Zeroes:
    a: Int32
    number: UInt8
    flag: bool
    text: str
    items: list[str]
    maybe: Optional[Int32]


@dataclass(frozen=True)
class FrozenPoint:
    x: Int32
    y: Int32


@dataclass(slots=True)
class SlotsPoint:
    x: Int32
    y: Int32


class Pair(NamedTuple):
    left: str
    right: Int32 = 0


class Plain:
    x: Int32
    label: str = 'none'

    def __init__(self, x: int) -> None:
        raise AssertionError('decoding must not call __init__')

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Plain) and (self.x, self.label) == (other.x, other.label)


class Temperature:
    def __init__(self, celsius: float) -> None:
        self._celsius = celsius

    @property
    def celsius(self) -> float:
        return self._celsius

    @celsius.setter
    def celsius(self, value: float) -> None:
        if value < -273.15:
            raise ValueError('below absolute zero')
        self._celsius = value

    @property
    def fahrenheit(self) -> float:
        return self._celsius * 9 / 5 + 32


@dataclass
class Session:
    user: str
    cache: dict = transient(default_factory=dict)
    _token: str = 'secret'


@dataclass
class Box(Generic[T]):
    item: T
    items: list[T] = field(default_factory=list)


@dataclass
class Node:
    value: Int32
    children: list['Node'] = field(default_factory=list)


@dataclass
class Outer:
    name: str
    inner: PointV1


@dataclass
class OuterWithBadInner:
    name: str
    inner: PointStrA


class Legacy:
    def __init__(self, code: int, ignored: str = '') -> None:
        self.code = code
        self.ignored = ignored


def _new_plain(x: int, label: str) -> Plain:
    plain = Plain.__new__(Plain)
    plain.x = x
    plain.label = label
    return plain


class CompositeTestCase(unittest.TestCase):
    def test_dataclass_round_trip(self):
        self.assertRoundTrip(PointV2, PointV2(a=1, b=-2))
        self.assertRoundTrip(Defaults, Defaults(a=1, label='x', tags=['a', 'b'], count=3))

    def test_null_composite(self):
        self.assertEqual(self.codec.encode(None, PointV1).hex(), 'ffffffff')
        self.assertIsNone(self.codec.decode(bytes.fromhex('ffffffff'), PointV1))

    def test_layout(self):
        data = self.codec.encode(PointV1(a=1), PointV1)
        # 1 field, 'a', 4 bytes, 1, no properties
        self.assertEqual(data.hex(), '01000000' '0100000061' '04000000' '01000000' '00000000')

    def test_unknown_members_are_skipped(self):
        data = self.codec.encode(PointV2(a=1, b=2), PointV2)
        result = self.codec.decode_with_report(data, PointV1)
        self.assertEqual(result.value, PointV1(a=1))
        self.assertEqual(result.skipped, (SkippedMember(('b',), 'unknown field'),))

    def test_unknown_members_are_skipped_in_strict_mode(self):
        codec = self.create_codec(STRICT_MEMBERS=True)
        data = codec.encode(PointV2(a=1, b=2), PointV2)
        self.assertEqual(codec.decode(data, PointV1), PointV1(a=1))

    def test_missing_members_get_their_defaults(self):
        data = self.codec.encode(PointV1(a=5), PointV1)
        result = self.codec.decode(data, Defaults)
        self.assertEqual(result, Defaults(a=5, label='default', tags=[], count=7))

    def test_default_factory_is_not_shared(self):
        data = self.codec.encode(PointV1(a=5), PointV1)
        first = self.codec.decode(data, Defaults)
        second = self.codec.decode(data, Defaults)
        self.assertIsNot(first.tags, second.tags)

    def test_missing_members_get_zero_values(self):
        data = self.codec.encode(PointV1(a=5), PointV1)
        result = self.codec.decode(data, Zeroes)
        self.assertEqual(result, Zeroes(a=5, number=0, flag=False, text=None, items=None, maybe=None))

    def test_unreadable_member_is_skipped(self):
        data = self.codec.encode(PointShortA(a=3), PointShortA)
        result = self.codec.decode_with_report(data, PointV1)
        self.assertEqual(result.value, PointV1(a=0))
        skipped, = result.skipped
        self.assertEqual(skipped.path, ('a',))
        self.assertIsInstance(skipped.error, TruncatedError)

    def test_member_with_trailing_data_is_skipped(self):
        data = self.codec.encode(PointStrA(a='xyz'), PointStrA)
        result = self.codec.decode_with_report(data, PointV1)
        self.assertEqual(result.value, PointV1(a=0))
        skipped, = result.skipped
        self.assertIsInstance(skipped.error, InvalidDataError)

    def test_strict_mode_propagates_member_errors(self):
        codec = self.create_codec(STRICT_MEMBERS=True)
        data = codec.encode(PointShortA(a=3), PointShortA)
        with self.assertRaises(TruncatedError):
            codec.decode(data, PointV1)

    def test_nested_skipped_member_path(self):
        data = self.codec.encode(OuterWithBadInner('n', PointStrA('abc')), OuterWithBadInner)
        result = self.codec.decode_with_report(data, Outer)
        self.assertEqual(result.value, Outer('n', PointV1(a=0)))
        skipped, = result.skipped
        self.assertEqual(skipped.path, ('inner', 'a'))
        self.assertTrue(str(skipped).startswith('inner.a: '))

    def test_plain_decode_reports_nothing(self):
        data = self.codec.encode(PointV1(a=1), PointV1)
        self.assertEqual(self.codec.decode_with_report(data, PointV1).skipped, ())

    def test_truncated_frame_propagates(self):
        data = self.codec.encode(PointV2(a=1, b=2), PointV2)
        with self.assertRaises(TruncatedError):
            self.codec.decode(data[:-6], PointV2)

    def test_null_member_name_is_invalid(self):
        data = bytes.fromhex('01000000' 'ffffffff')
        with self.assertRaises(InvalidDataError):
            self.codec.decode(data, PointV1)

    def test_frozen_dataclass(self):
        self.assertRoundTrip(FrozenPoint, FrozenPoint(1, 2))

    def test_slots_dataclass(self):
        self.assertRoundTrip(SlotsPoint, SlotsPoint(3, 4))

    def test_named_tuple(self):
        self.assertRoundTrip(Pair, Pair('a', 2))
        data = self.codec.encode(PointV1(a=1), PointV1)
        self.assertEqual(self.codec.decode(data, Pair), Pair(None, 0))

    def test_plain_class_skips_init(self):
        result = self.assertRoundTrip(Plain, _new_plain(1, 'one'))
        self.assertIsInstance(result, Plain)

    def test_plain_class_default(self):
        data = self.codec.encode(PointV1(a=1), PointV1)
        result = self.codec.decode(data, Plain)
        self.assertEqual(result, _new_plain(0, 'none'))

    def test_properties(self):
        data = self.codec.encode(Temperature(21.5), Temperature)
        # no fields, 1 property
        self.assertTrue(data.startswith(bytes.fromhex('00000000' '01000000')))
        result = self.codec.decode(data, Temperature)
        self.assertEqual(result.celsius, 21.5)
        self.assertAlmostEqual(result.fahrenheit, 70.7)

    def test_property_setter_failure_is_skipped(self):
        data = self.codec.encode(Temperature(-300.0), Temperature)
        result = self.codec.decode_with_report(data, Temperature)
        skipped, = result.skipped
        self.assertEqual(skipped.path, ('celsius',))
        self.assertIn('below absolute zero', skipped.reason)
        codec = self.create_codec(STRICT_MEMBERS=True)
        with self.assertRaises(InvalidDataError):
            codec.decode(data, Temperature)

    def test_transient_and_private_fields(self):
        session = Session('alice', cache={'k': 1}, _token='other')
        data = self.codec.encode(session, Session)
        result = self.codec.decode(data, Session)
        self.assertEqual(result.user, 'alice')
        self.assertEqual(result.cache, {})
        self.assertEqual(result._token, 'secret')

    def test_generic(self):
        self.assertRoundTrip(Box[Int16], Box(item=5, items=[1, 2]))
        self.assertRoundTrip(Box[str], Box(item='a'))
        data = self.codec.encode(Box(item=5), Box[Int16])
        # 2 fields, 'item', 2 bytes, 5, 'items', 4 bytes, empty list, no properties
        self.assertEqual(
            data.hex(),
            '02000000' '040000006974656d' '02000000' '0500' '050000006974656d73' '04000000' '00000000' '00000000',
        )

    def test_unbound_generic_cannot_decode(self):
        data = self.codec.encode(Box(item='a'))
        # the item was written as str but nothing on the wire says so
        with self.assertRaises(UnsupportedTypeError):
            self.codec.decode(data, Box)

    def test_recursive_type(self):
        tree = Node(1, [Node(2), Node(3, [Node(4)])])
        self.assertRoundTrip(Node, tree)

    def test_cycle_is_a_recursion_error(self):
        node = Node(1)
        node.children.append(node)
        with self.assertRaises(RecursionError):
            self.codec.encode(node, Node)

    def test_descriptor(self):
        self.codec.register_descriptor(SerializationDescriptor(Legacy, (Member.field('code', Int32),)))
        data = self.codec.encode(Legacy(42, 'dropped'), Legacy)
        result = self.codec.decode(data, Legacy)
        self.assertEqual(result.code, 42)
        self.assertFalse(hasattr(result, 'ignored'))

    def test_unresolvable_annotation(self):
        class Broken:
            value: 'DoesNotExist'  # type: ignore[name-defined] # noqa: F821

        with self.assertRaises(UnsupportedTypeError):
            self.codec.make_codec(Broken)

    def test_factory_cache_is_restored_after_failure(self):
        @dataclass
        class Invalid:
            ok: Int32
            bad: int | str

        with self.assertRaises(UnsupportedTypeError):
            self.codec.make_codec(Invalid)
        # a second attempt fails the same way instead of finding a half built wire type
        with self.assertRaises(UnsupportedTypeError):
            self.codec.make_codec(Invalid)

    def test_max_members(self):
        codec = self.create_codec(MAX_COLLECTION_LENGTH=1)
        data = codec.encode(PointV2(a=1, b=2), PointV2)
        with self.assertRaises(InvalidDataError):
            codec.decode(data, PointV2)

    def test_skipped_member_is_logged(self):
        with capture_logs() as logs:
            codec = self.create_codec()
            data = codec.encode(PointShortA(a=3), PointShortA)
            codec.decode(data, PointV1)
        warnings = [log for log in logs if log['event'] == 'member skipped']
        self.assertEqual(len(warnings), 1)
        self.assertEqual(warnings[0]['log_level'], 'warning')
        self.assertEqual(warnings[0]['path'], 'a')

    def test_skipped_member_logging_can_be_disabled(self):
        with capture_logs() as logs:
            codec = self.create_codec(LOG_SKIPPED_MEMBERS=False)
            data = codec.encode(PointShortA(a=3), PointShortA)
            result = codec.decode_with_report(data, PointV1)
        self.assertEqual(len(result.skipped), 1)
        self.assertFalse([log for log in logs if log['event'] == 'member skipped'])
