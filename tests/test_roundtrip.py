from dataclasses import dataclass
from enum import IntEnum

from hypothesis import given
from hypothesis import strategies as st

from kv_environ.codec import decode, encode
from kv_environ.kinds import Int32, UInt8, UInt16


class AddrType(IntEnum):
    HOME = 0
    WORK = 1


@dataclass
class Address:
    kind: AddrType
    street: str


@dataclass
class Record:
    a: str
    b: int
    s: list[str | None]


@dataclass
class KitchenSink:
    name: str
    age: UInt8
    numbers: list[int]
    fruits: list[str]
    addr: list[Address]
    rec_ptr: Record | None
    port_name: dict[UInt16, str]
    arr_list: list[list[str]]


@dataclass
class Endpoint:
    host: str
    port: UInt16
    secure: bool


@dataclass
class Service:
    name: str
    replicas: Int32
    enabled: bool
    tags: list[str]
    endpoints: list[Endpoint]
    limits: dict[UInt16, int]
    fallback: Endpoint | None
    note: str | None
    matrix: list[list[int]]


_KITCHEN_SINK_ENV = {
    "NAME": "Lufy",
    "AGE": "66",
    "NUMBERS": "34,65,234,653,3",
    "FRUITS": "banana,apple,lemon,whatever",
    "ADDR.0.KIND": "1",
    "ADDR.0.STREET": "Somewhere str. over the rainbow",
    "ADDR.1.KIND": "0",
    "ADDR.1.STREET": "Somewhereelse str. over.",
    "REC_PTR.A": "ValA",
    "REC_PTR.B": "-1002",
    "REC_PTR.S": "this,is,a,ptr,list",
    "PORT_NAME.80": "http",
    "PORT_NAME.443": "https",
    "PORT_NAME.25": "smtp",
    "ARR_LIST.0": "list,of,strings",
    "ARR_LIST.1": 'once,upon,"a time, comma",omg',
    "ARR_LIST.2": "red,green,blue",
}

_TEXT = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=20)
_ENDPOINTS = st.builds(Endpoint, host=_TEXT, port=st.integers(0, 2**16 - 1), secure=st.booleans())
_SERVICES = st.builds(
    Service,
    name=_TEXT,
    replicas=st.integers(-(2**31), 2**31 - 1),
    enabled=st.booleans(),
    tags=st.lists(_TEXT, max_size=4),
    endpoints=st.lists(_ENDPOINTS, max_size=3),
    limits=st.dictionaries(st.integers(0, 2**16 - 1), st.integers(), max_size=4),
    fallback=st.none() | _ENDPOINTS,
    note=st.none() | _TEXT,
    matrix=st.lists(st.lists(st.integers(), max_size=3), max_size=3),
)


def test_kitchen_sink_decodes_and_reencodes() -> None:
    entries = [f"{key}={value}" for key, value in _KITCHEN_SINK_ENV.items()]

    out = decode(KitchenSink, entries)

    assert out == KitchenSink(
        name="Lufy",
        age=66,
        numbers=[34, 65, 234, 653, 3],
        fruits=["banana", "apple", "lemon", "whatever"],
        addr=[
            Address(AddrType.WORK, "Somewhere str. over the rainbow"),
            Address(AddrType.HOME, "Somewhereelse str. over."),
        ],
        rec_ptr=Record(a="ValA", b=-1002, s=["this", "is", "a", "ptr", "list"]),
        port_name={80: "http", 443: "https", 25: "smtp"},
        arr_list=[["list", "of", "strings"], ["once", "upon", "a time, comma", "omg"], ["red", "green", "blue"]],
    )
    assert isinstance(out.addr[0].kind, AddrType)
    assert sorted(encode(out)) == sorted(entries)


def test_kitchen_sink_roundtrip_with_prefix() -> None:
    entries = [f"APP_{key}={value}" for key, value in _KITCHEN_SINK_ENV.items()]
    out = decode(KitchenSink, [*entries, "UNRELATED=1"], "APP_")
    assert sorted(encode(out, "APP_")) == sorted(entries)


def test_line_breaks_survive_roundtrip() -> None:
    service = Service(
        name="multi\nline",
        replicas=1,
        enabled=True,
        tags=["line1\rline2", "x", "a\r\nb"],
        endpoints=[],
        limits={},
        fallback=None,
        note="carriage\rreturn",
        matrix=[[1], []],
    )
    assert decode(Service, encode(service)) == service


@given(service=_SERVICES)
def test_decode_inverts_encode(service: Service) -> None:
    assert decode(Service, encode(service)) == service


@given(ports=st.dictionaries(st.integers(0, 2**16 - 1), _TEXT, max_size=6))
def test_decode_inverts_encode_for_maps(ports: dict[int, str]) -> None:
    entries = encode(ports, "PORT_", annotation=dict[UInt16, str])
    assert decode(dict[UInt16, str], entries, "PORT_") == ports
