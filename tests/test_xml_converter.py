import pytest
from lxml import etree

from jsonconv.errors import ConversionError
from jsonconv.xml_converter import (
    JsonKind,
    XmlOptions,
    build_xml_tree,
    classify,
    convert_to_xml,
    sanitize_name,
)


def test_object_with_array_maps_to_elements_and_items():
    root = build_xml_tree({"a": 1, "b": [2, 3]})

    assert root.tag == "root"
    assert [child.tag for child in root] == ["a", "b"]
    assert root.find("a").text == "1"

    items = root.find("b").findall("item")
    assert [item.get("index") for item in items] == ["0", "1"]
    assert [item.text for item in items] == ["2", "3"]


def test_object_keys_keep_insertion_order():
    root = build_xml_tree({"zeta": 1, "alpha": 2, "mid": 3})
    assert [child.tag for child in root] == ["zeta", "alpha", "mid"]


def test_array_items_are_indexed_in_order():
    root = build_xml_tree(["x", "y", "z", "w"])
    assert [item.tag for item in root] == ["item"] * 4
    assert [item.get("index") for item in root] == ["0", "1", "2", "3"]
    assert [item.text for item in root] == ["x", "y", "z", "w"]


def test_empty_containers_have_no_children_or_text():
    root = build_xml_tree([])
    assert len(root) == 0
    assert root.text is None

    root = build_xml_tree({"obj": {}, "arr": []})
    for child in root:
        assert len(child) == 0
        assert child.text is None


def test_null_renders_empty_element():
    root = build_xml_tree({"x": None})
    x = root.find("x")
    assert x.text is None
    assert len(x) == 0
    assert b"<x/>" in convert_to_xml({"x": None})


@pytest.mark.parametrize(
    "value, expected",
    [
        (42, "42"),
        (-7, "-7"),
        (1.5, "1.5"),
        (1e100, "1e+100"),
        (True, "true"),
        (False, "false"),
        ("hello <world> & co", "hello <world> & co"),
        ("", ""),
    ],
)
def test_scalar_text(value, expected):
    root = build_xml_tree({"v": value})
    assert (root.find("v").text or "") == expected


def test_top_level_scalar_sets_root_text():
    assert build_xml_tree("plain").text == "plain"
    assert build_xml_tree(None).text is None


def test_nested_scalars_at_depth():
    root = build_xml_tree({"a": [{"b": [True, None]}]})
    b_items = root.find("a/item/b").findall("item")
    assert b_items[0].text == "true"
    assert b_items[1].text is None


def test_invalid_keys_are_sanitized_and_original_kept():
    root = build_xml_tree({"first name": 1, "1abc": 2, "": 3, "xmlns": 4, "a:b": 5, "ok": 6})

    assert [child.tag for child in root] == ["first_name", "_1abc", "_", "_xmlns", "a_b", "ok"]
    assert [child.get("key") for child in root] == ["first name", "1abc", "", "xmlns", "a:b", None]


def test_invalid_keys_raise_with_error_policy():
    with pytest.raises(ConversionError):
        build_xml_tree({"bad key": 1}, XmlOptions(invalid_names="error"))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("valid", "valid"),
        ("with-dash.and_dot", "with-dash.and_dot"),
        ("-lead", "_-lead"),
        ("9lives", "_9lives"),
        ("two words", "two_words"),
        ("@id", "_id"),
        ("XMLData", "_XMLData"),
        ("café", "café"),
        ("\U0001F600", "\U0001F600"),
        ("\U0001F600 face", "\U0001F600_face"),
        ("", "_"),
    ],
)
def test_sanitize_name(name, expected):
    assert sanitize_name(name) == expected


def test_depth_limit_is_enforced():
    options = XmlOptions(max_depth=2)
    build_xml_tree({"a": {"b": 1}}, options)
    build_xml_tree({"a": {"b": {}}}, options)

    with pytest.raises(ConversionError, match="deeper than 2"):
        build_xml_tree({"a": {"b": {"c": 1}}}, options)


def test_default_depth_limit_rejects_pathological_nesting():
    value = []
    for _ in range(600):
        value = [value]
    with pytest.raises(ConversionError):
        build_xml_tree(value)


def test_deep_nesting_below_limit_does_not_recurse():
    value = "leaf"
    for _ in range(1500):
        value = [value]
    root = build_xml_tree(value, XmlOptions(max_depth=2000))

    node = root
    depth = 0
    while len(node):
        node = node[0]
        depth += 1
    assert depth == 1500
    assert node.text == "leaf"


def test_control_characters_raise_conversion_error():
    with pytest.raises(ConversionError):
        build_xml_tree({"bad": "bell\x07"})


def test_non_finite_numbers_raise_conversion_error():
    with pytest.raises(ConversionError):
        build_xml_tree({"n": float("nan")})


def test_invalid_root_tag_raises_conversion_error():
    with pytest.raises(ConversionError):
        build_xml_tree({}, XmlOptions(root_tag="not valid"))


def test_conversion_is_deterministic():
    value = {"a": [1, {"b": None}], "c": "text"}
    assert etree.tostring(build_xml_tree(value)) == etree.tostring(build_xml_tree(value))
    assert convert_to_xml(value) == convert_to_xml(value)


def test_serialized_output_is_indented_utf8():
    xml_bytes = convert_to_xml({"a": 1, "b": ["é"]})

    assert xml_bytes.startswith(b"<?xml")
    assert b"\n  <a>1</a>\n" in xml_bytes
    assert b'\n    <item index="0">\xc3\xa9</item>\n' in xml_bytes

    parsed = etree.fromstring(xml_bytes)
    assert parsed.find("b/item").text == "é"


def test_custom_indent_and_root_tag():
    xml_bytes = convert_to_xml({"a": 1}, XmlOptions(root_tag="document", indent=4, xml_declaration=False))
    assert xml_bytes.startswith(b"<document>")
    assert b"\n    <a>1</a>\n" in xml_bytes


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, JsonKind.NULL),
        (True, JsonKind.BOOL),
        (0, JsonKind.NUMBER),
        (0.5, JsonKind.NUMBER),
        ("s", JsonKind.STRING),
        ([], JsonKind.ARRAY),
        ({}, JsonKind.OBJECT),
    ],
)
def test_classify(value, kind):
    assert classify(value) is kind


def test_classify_rejects_non_json_types():
    with pytest.raises(ConversionError):
        classify({1, 2})


def test_non_bmp_keys_are_kept_as_tags():
    root = build_xml_tree({"\U0001F600": 1})
    child = root[0]
    assert child.tag == "\U0001F600"
    assert child.get("key") is None
    assert "\U0001F600".encode("utf-8") in convert_to_xml({"\U0001F600": 1})
