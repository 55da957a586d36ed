import logging
import math
from dataclasses import dataclass

import pytest

from packetsize.datatypes import (
    CFrame,
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    NumberSequence,
    NumberSequenceKeypoint,
    Vector3,
)
from packetsize.sizing.estimator import estimate
from packetsize.sizing.packet import estimate_value


class Widget:
    pass


def test_nil_is_free():
    assert estimate_value(None) == 0


@pytest.mark.parametrize("text,expected", [("", 2), ("hello", 7), ("x" * 300, 302)])
def test_string_length_plus_two(text, expected):
    assert estimate_value(text) == expected


def test_string_counts_utf8_bytes():
    assert estimate_value("é") == 4
    assert estimate_value(b"\x00\x01\x02") == 5


def test_array_of_fixed_elements():
    n, s = 4, 12
    value = [Vector3(i, i, i) for i in range(n)]
    assert estimate_value(value) == 1 + n + n * (s + 1)


def test_empty_tables():
    assert estimate_value([]) == 1
    assert estimate_value({}) == 1


def test_dict_with_index_keys_is_an_array():
    assert estimate_value({1: True, 2: False}) == estimate_value([True, False]) == 1 + 2 + 2 * 2
    assert estimate_value({2: True, 1: False}) == 7
    assert estimate_value({1.0: True}) == 1 + 1 + 2


def test_gapped_keys_are_a_map():
    # keys 1 and 3: each key is a number (8) and each value a boolean (1)
    assert estimate_value({1: True, 3: False}) == 1 + 2 * (8 + 1) + 2 * (1 + 1)


def test_bool_keys_are_not_indices():
    assert estimate_value({True: "a"}) == 1 + (1 + 1) + (3 + 1)


def test_keyed_table():
    value = {"name": "bob", "alive": True}
    keys = (4 + 2 + 1) + (5 + 2 + 1)
    values = (3 + 2 + 1) + (1 + 1)
    assert estimate_value(value) == 1 + keys + values


def test_nested_tables():
    inner = [True]
    assert estimate_value(inner) == 4
    assert estimate_value({"a": inner}) == 1 + (3 + 1) + (4 + 1)


def test_self_reference_terminates():
    t = {}
    t["self"] = t
    assert estimate_value(t) == 1 + (6 + 1) + (0 + 1)
    a = []
    a.append(a)
    assert estimate_value(a) == 1 + 1 + (0 + 1)


def test_shared_subtable_priced_once():
    shared = [True, True]
    outer = [shared, shared]
    shared_size = 1 + 2 + 2 * 2
    assert estimate_value(outer) == 1 + 2 + (shared_size + 1) + (0 + 1)


def test_equal_but_distinct_tables_both_priced():
    outer = [[True], [True]]
    assert estimate_value(outer) == 1 + 2 + 2 * (4 + 1)


def test_visited_is_shared_with_caller():
    t = [1, 2]
    visited = set()
    assert estimate(t, visited) == 1 + 2 + 2 * 9
    assert id(t) in visited
    assert estimate(t, visited) == 0


def test_cframe_axis_aligned():
    assert estimate_value(CFrame.new(1, 2, 3)) == 13
    turned = CFrame(Vector3(5, 5, 5), ((0, 0, 1), (0, 1, 0), (-1, 0, 0)))
    assert estimate_value(turned) == 13


def test_cframe_rotated():
    c, s = math.cos(0.3), math.sin(0.3)
    assert estimate_value(CFrame(Vector3(), (c, 0, s, 0, 1, 0, -s, 0, c))) == 21


def test_keyframe_sequences():
    ns = NumberSequence([NumberSequenceKeypoint(0, 0), NumberSequenceKeypoint(1, 1, 0.5)])
    assert estimate_value(ns) == 4 + 2 * 12
    cs = ColorSequence([
        ColorSequenceKeypoint(0, Color3(1, 0, 0)),
        ColorSequenceKeypoint(0.5, Color3(0, 1, 0)),
        ColorSequenceKeypoint(1, Color3(0, 0, 1)),
    ])
    assert estimate_value(cs) == 4 + 3 * 16
    assert estimate_value(NumberSequence()) == 4


def test_unsupported_kind_warns_and_is_zero(caplog):
    with caplog.at_level(logging.WARNING, logger="packetsize"):
        assert estimate_value(Widget()) == 0
    assert any("Widget" in r.getMessage() for r in caplog.records)
    assert all(r.levelno == logging.WARNING for r in caplog.records)


def test_unsupported_inside_table_keeps_overhead(caplog):
    with caplog.at_level(logging.WARNING, logger="packetsize"):
        assert estimate_value([Widget(), True]) == 1 + 2 + (0 + 1) + (1 + 1)
        assert estimate_value({1, 2}) == 0
    assert any("set" in r.getMessage() for r in caplog.records)


@dataclass
class Message:
    kind: str = "table"


@dataclass
class Label:
    kind: str = "Vector3"


def test_foreign_kind_attribute_is_unsupported(caplog):
    with caplog.at_level(logging.WARNING, logger="packetsize"):
        assert estimate_value(Message()) == 0
        assert estimate_value(Label()) == 0
    messages = [r.getMessage() for r in caplog.records]
    assert any("Message" in m for m in messages)
    assert any("Label" in m for m in messages)


def test_unsupported_ignores_broken_configuration(monkeypatch, tmp_path):
    monkeypatch.setenv("PACKETSIZE_LOG_LEVEL", "CHATTY")
    monkeypatch.setenv("PACKETSIZE_CONFIG", str(tmp_path / "missing.yml"))
    # force get_logger to set the logger up again
    monkeypatch.setattr(logging.getLogger("packetsize"), "handlers", [])
    assert estimate_value(Widget()) == 0
    assert estimate_value([Widget()]) == 1 + 1 + 1


def test_deep_nesting():
    value = True
    for _ in range(200):
        value = [value]
    # each level adds header, count and the element's type tag
    assert estimate_value(value) == 1 + 200 * 3
