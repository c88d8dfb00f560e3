import pytest

from record_interface import MISSING, InvalidArgument, wrap


def test_read_without_path_returns_record(handle):
    assert handle.read() == {"a": 1, "b": {"c": 2, "d": 3}, "e": [4, 5]}


def test_read_property_and_nested_property(handle):
    assert handle.read("a") == 1
    assert handle.read("b", "c") == 2
    assert handle.read("e") == [4, 5]


def test_read_missing_keys_returns_missing(handle):
    assert handle.read("z") is MISSING
    assert handle.read("a", "z") is MISSING
    assert handle.read("b", "z") is MISSING
    assert handle.read("z", "y", "x") is MISSING


def test_read_does_not_index_into_lists(handle):
    assert handle.read("e", 0) is MISSING


def test_stored_none_is_not_missing():
    h = wrap({"a": None})
    assert h.read("a") is None
    assert h.read("b") is MISSING
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_write_property(handle):
    assert handle.write("f", 1) is handle
    assert handle.read("f") == 1


def test_write_nested_property(handle):
    handle.write(("b", "c"), 9)
    assert handle.read("b", "c") == 9
    assert handle.read("b", "d") == 3


def test_write_creates_bridge_records(handle):
    handle.write(["f", "g", "h"], 1)
    assert handle.read("f") == {"g": {"h": 1}}
    assert handle.read("f", "g", "h") == 1


def test_write_replaces_leaf_intermediates_with_bridges(handle):
    handle.write(("a", "x"), 5)
    assert handle.read("a") == {"x": 5}


def test_write_is_chainable(handle):
    handle.write("x", 1).write(("y", "z"), 2).remove("a")
    assert handle.read("x") == 1
    assert handle.read("y", "z") == 2
    assert handle.read("a") is MISSING


def test_write_requires_a_value(handle):
    with pytest.raises(InvalidArgument):
        handle.write("f")
    with pytest.raises(InvalidArgument):
        handle.write()


def test_write_empty_path_replaces_record(handle):
    handle.write((), {"z": 1})
    assert handle.read() == {"z": 1}

    handle.replace({"y": 2})
    assert handle.read() == {"y": 2}


def test_replace_with_non_record_is_allowed(handle):
    handle.replace(42)
    assert handle.read() == 42
    assert handle.read("a") is MISSING


def test_remove_property(handle):
    handle.remove("a")
    assert handle.read("a") is MISSING


def test_remove_nested_property(handle):
    assert handle.remove("b", "c") is handle
    assert handle.read("b", "c") is MISSING
    assert handle.read("b") == {"d": 3}


def test_remove_missing_paths_is_a_noop(handle):
    before = handle.clone()
    handle.remove("k")
    handle.remove("k", "j")
    handle.remove("a", "j")
    handle.remove()
    assert handle.read() == before


@pytest.mark.parametrize("path", [("a",), ("b", "c"), ("q",), ("q", "r"), ("e", "x")])
def test_remove_then_read_is_missing(handle, path):
    handle.remove(*path)
    assert handle.read(*path) is MISSING


def test_scenario_read_write_remove(handle):
    assert handle.read("b", "c") == 2
    handle.write(("b", "c"), 9)
    assert handle.read("b", "c") == 9
    handle.remove("b", "c")
    assert handle.read("b", "c") is MISSING
    assert "d" in handle.read("b")


@pytest.mark.parametrize("path", [("b", "c"), ["b", "c"], ("f", "g")])
def test_same_path_value_works_for_write_read_remove(handle, path):
    handle.write(path, 9)
    assert handle.read(path) == 9
    assert handle.read(*path) == 9

    assert handle.remove(path) is handle
    assert handle.read(path) is MISSING
    assert handle.read(path[0]) is not MISSING


def test_unhashable_keys_are_never_found(handle):
    assert handle.read("b", ["c"]) is MISSING
    handle.remove("b", ["c"])
    assert handle.read("b") == {"c": 2, "d": 3}


def test_remove_missing_list_path_is_a_noop(handle):
    before = handle.clone()
    handle.remove(["q", "r"])
    assert handle.read() == before
