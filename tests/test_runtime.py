from typing import Any

import pytest

from unite import assign, tag_of, unite
from unite.runtime import TaggedUnion, conversion_key, tuple_arity


@pytest.fixture
def Value() -> type:
    return unite("enum Value { Number = int, Text = str }", {})


def test_mut_ref_refuses_after_retag(Value):
    value = Value.Number(1)
    ref = value.as_number_mut()

    assign(value, Value.Text("one"))
    assert value.is_text()
    with pytest.raises(RuntimeError, match="holds case 'Text', not 'Number'"):
        ref.value  # noqa: B018
    with pytest.raises(RuntimeError, match="stale reference"):
        ref.value = 2
    assert value.as_text() == "one"


def test_mut_ref_taken_after_retag_works(Value):
    value = Value.Number(1)
    assign(value, Value.Text("one"))
    ref = value.as_text_mut()
    ref.value = "two"
    assert value.as_text() == "two"


def test_assign_returns_target_and_checks_union_type(Value):
    value = Value.Number(1)
    assert assign(value, Value.Number(2)) is value
    assert value.as_number() == 2

    Other = unite("enum Other { Number = int }", {})
    with pytest.raises(TypeError, match="cannot assign 'Other' to 'Value'"):
        assign(value, Other.Number(3))


def test_tag_of_after_assign(Value):
    value = Value.Text("a")
    assign(value, Value.Number(1))
    assert tag_of(value) == "Number"


@pytest.mark.parametrize(
    ("payload_type", "arity"),
    [
        (tuple[()], 0),
        (tuple[int], 1),
        (tuple[int, str], 2),
        (tuple[int, ...], None),
        (tuple, None),
        (list[int], None),
        (int, None),
    ],
)
def test_tuple_arity(payload_type: Any, arity):
    assert tuple_arity(payload_type) == arity


@pytest.mark.parametrize(
    ("payload_type", "key"),
    [
        (None, type(None)),
        (int, int),
        (tuple[()], tuple),
        (dict[str, int], dict),
    ],
)
def test_conversion_key(payload_type: Any, key: type):
    assert conversion_key(payload_type) is key


def test_conversion_key_rejects_non_types():
    with pytest.raises(TypeError, match="cannot be used as a conversion source type"):
        conversion_key("int")


def test_duplicate_cases_in_hand_written_union():
    with pytest.raises(TypeError, match="duplicate case 'A' in union 'Dup'"):

        class Dup(TaggedUnion):
            __slots__ = ()
            __cases__ = ("A", "A")


def test_class_body_rebinding_is_rejected():
    with pytest.raises(TypeError, match="duplicate member 'helper' in union 'Twice'"):

        class Twice(TaggedUnion):
            def helper(self):
                pass

            def helper(self):  # noqa: F811
                pass


def test_base_class_has_no_conversions():
    with pytest.raises(TypeError, match="no conversion from 'int' to 'TaggedUnion'"):
        TaggedUnion(1)
