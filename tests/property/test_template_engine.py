"""Property-based tests for template engine.

Tests path resolution, termination, and non-mutation.
"""

import copy

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from opsflow_core.template import TemplateEngine, get_nested_value
from opsflow_core.workflow import TemplateVariableValidator

# Identifiers usable as path segments
identifier = st.from_regex(r"^[a-z][a-z0-9_]{0,10}$", fullmatch=True)

# Scalar strings carry no template tokens
scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=30).filter(lambda t: "{" not in t),
)

json_values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(identifier, children, max_size=4),
    ),
    max_leaves=20,
)


@st.composite
def context_and_path(draw):
    """A nested context plus a dot/bracket path to a value stored in it."""
    leaf = draw(json_values)
    segments = draw(st.lists(st.one_of(identifier, st.integers(0, 3)), min_size=1, max_size=5))

    value = leaf
    for segment in reversed(segments):
        if isinstance(segment, int):
            items = draw(st.lists(json_values, min_size=segment, max_size=segment))
            value = [*items, value]
        else:
            value = {segment: value}

    path = ""
    for segment in segments:
        path += f"[{segment}]" if isinstance(segment, int) else f".{segment}"
    return {"root": value}, "root" + path, leaf


# =============================================================================
# Test Classes
# =============================================================================


@pytest.mark.property
class TestPathResolution:
    """Property tests for get_nested_value."""

    @given(context_and_path())
    @settings(max_examples=200)
    def test_returns_stored_value(self, case):
        """A present path yields exactly the stored value."""
        context, path, leaf = case
        assert get_nested_value(context, path) == leaf

    @given(json_values, st.lists(identifier, min_size=1, max_size=5))
    @settings(max_examples=200)
    def test_absent_paths_never_raise(self, context, segments):
        """Any path into any structure resolves or yields None."""
        get_nested_value(context, ".".join(segments))

    @given(st.dictionaries(identifier, json_values, max_size=5), identifier)
    @settings(max_examples=100)
    def test_missing_key_is_none(self, context, key):
        context.pop(key, None)
        assert get_nested_value(context, f"{key}.anything") is None


@pytest.mark.property
class TestInterpolation:
    """Property tests for TemplateEngine.interpolate."""

    @given(st.text(max_size=200).filter(lambda t: "{{" not in t), json_values)
    @settings(max_examples=200)
    def test_token_free_text_unchanged(self, text, context):
        assert TemplateEngine().interpolate(text, {"x": context}) == text

    @given(
        st.dictionaries(
            identifier,
            st.one_of(
                st.text(alphabet="ab{} ", max_size=20),
                st.builds(lambda k: "{{" + k + "}}", identifier),
                st.builds(lambda k: "x{{" + k + "}}", identifier),
            ),
            min_size=1,
            max_size=5,
        ),
        identifier,
        st.integers(0, 5),
    )
    @settings(max_examples=300)
    def test_always_terminates(self, context, key, max_depth):
        """Self- and mutually-referential contexts still return a string."""
        result = TemplateEngine(max_depth=max_depth).interpolate("{{" + key + "}}", context)
        assert isinstance(result, str)

    @given(st.text(max_size=50).filter(lambda t: "{" not in t and "}" not in t))
    @settings(max_examples=100)
    def test_scalar_substitution(self, value):
        assert TemplateEngine().interpolate("<{{v}}>", {"v": value}) == f"<{value}>"

    @given(st.integers())
    @settings(max_examples=50)
    def test_integer_substitution(self, value):
        assert TemplateEngine().interpolate("{{n}}", {"n": value}) == str(value)


@pytest.mark.property
class TestObjectInterpolation:
    """Property tests for TemplateEngine.interpolate_object."""

    @given(json_values, st.dictionaries(identifier, json_values, max_size=4))
    @settings(max_examples=200)
    def test_never_mutates_input(self, config, context):
        snapshot = copy.deepcopy(config)
        context_snapshot = copy.deepcopy(context)

        TemplateEngine().interpolate_object(config, context)

        assert config == snapshot
        assert context == context_snapshot

    @given(json_values)
    @settings(max_examples=200)
    def test_token_free_values_preserved(self, config):
        """Without tokens, the result equals the input (lists stay lists)."""
        assert TemplateEngine().interpolate_object(config, {}) == config


@pytest.mark.property
class TestVariableValidation:
    """Property tests for TemplateVariableValidator."""

    @given(st.lists(identifier, min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_listed_fields_are_valid(self, fields):
        config = {"body": " ".join("{{" + f + ".sub}}" for f in fields)}
        assert TemplateVariableValidator().validate(config, fields).valid is True

    @given(st.lists(identifier, min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_unlisted_fields_reported_once(self, fields):
        config = ["{{" + f + "}}" for f in fields * 2]
        result = TemplateVariableValidator().validate(config, [])

        assert result.valid is False
        assert result.missing_fields == list(dict.fromkeys(fields))
