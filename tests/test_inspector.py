#
# Eyeball - Inspector Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import re

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from eyeball.inspector import Inspector, inspect
from eyeball.options import InspectOptions, default_options
from eyeball.sentinels import UNSET
from eyeball.styles import ansi_modifier, plain_modifier


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class Ticket:
    pass


def run(a, b):
    return a, b


@pytest.fixture
def quiet() -> Inspector:
    """Uncolored inspector returning text instead of writing it."""
    return Inspector(InspectOptions.plain(), stream=None)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestOutput:
    def test_writes_to_stream(self, buffer):
        result = Inspector(stream=buffer, modifier=plain_modifier).inspect({"hello": "moto"}, "small object")
        assert result is None
        assert buffer.getvalue() == "small object: {hello : 'moto'}\n"

    def test_default_stream_is_stdout(self, capsys):
        inspect(42, "n", modifier=plain_modifier)
        assert capsys.readouterr().out == "n: 42\n"

    def test_default_stream_colored(self, capsys):
        inspect(42)
        assert capsys.readouterr().out == ansi_modifier("yellow", "42") + "\n"

    def test_stream_none_returns(self, capsys):
        assert inspect(42, "n", modifier=plain_modifier, stream=None) == "n: 42"
        assert capsys.readouterr().out == ""

    def test_custom_nl(self, buffer):
        Inspector(stream=buffer, modifier=plain_modifier, nl="\r\n").inspect(42, "n")
        assert buffer.getvalue() == "n: 42\r\n"

    def test_multiple_writes(self, buffer):
        inspector = Inspector(stream=buffer, modifier=plain_modifier)
        inspector.inspect(1)
        inspector.inspect(2)
        assert buffer.getvalue() == "1\n2\n"


class TestArguments:
    def test_label_as_options(self):
        assert inspect(42, {"stream": None, "modifier": plain_modifier}) == "42"

    def test_label_as_inspect_options(self):
        assert inspect([None], InspectOptions.plain().merge(stream=None)) == "[[null]]"

    @pytest.mark.parametrize(
        "label",
        [
            pytest.param(5, id="int"),
            pytest.param(["t"], id="list"),
            pytest.param(b"t", id="bytes"),
        ],
    )
    def test_non_str_label_is_not_rendered(self, label, caplog):
        with caplog.at_level(logging.WARNING, logger="eyeball.options"):
            assert inspect(42, label, modifier=plain_modifier, stream=None) == "42"
        assert "must be a mapping or InspectOptions" in caplog.text

    def test_non_str_label_with_options(self, quiet):
        with pytest.raises(TypeError, match="options given twice"):
            quiet.inspect(1, 5, options={"max_depth": 2})

    def test_empty_label(self, quiet):
        assert quiet.inspect(42, "") == "42"

    def test_options_object_keeps_base(self):
        inspector = Inspector(stream=None, max_depth=1)
        out = inspector.inspect({"a": [1]}, options=InspectOptions(modifier=plain_modifier))
        assert out == "{a : [nested array]}"

    def test_invalid_override_ignored(self, quiet, caplog):
        with caplog.at_level(logging.WARNING, logger="eyeball.options"):
            assert quiet.inspect({"a": [1]}, max_depth=0) == "{a : [1]}"
        assert "max_depth must be a positive integer" in caplog.text

    def test_options_keyword(self, quiet):
        assert quiet.inspect({"a": [1]}, "t", options={"max_depth": 1}) == "t: {a : [nested array]}"

    def test_keyword_overrides_last(self, quiet):
        assert quiet.inspect({"a": [1]}, options={"max_depth": 1}, max_depth=2) == "{a : [1]}"

    def test_options_given_twice(self, quiet):
        with pytest.raises(TypeError, match="options given twice"):
            quiet.inspect(1, {"max_depth": 1}, options={"max_depth": 2})

    def test_missing_handler(self, quiet):
        with pytest.raises(LookupError, match="'ticket'"):
            quiet.inspect(Ticket(), types={"ticket": Ticket})


class TestInspector:
    def test_base_options(self, quiet):
        assert quiet.options.stream is None
        assert quiet.options.modifier is plain_modifier
        assert quiet.options.max_depth == 5

    def test_calls_do_not_leak(self, quiet):
        quiet.inspect([1], max_depth=1, pretty_print=False)
        assert quiet.options.max_depth == 5
        assert quiet.options.pretty_print is True

    def test_configure(self, quiet):
        assert quiet.configure(skip=["password"]) is quiet
        assert quiet.inspect({"user": "bob", "password": "x"}) == "{user : 'bob'}"
        assert quiet.inspect({"password": "x"}) == "{}"

    def test_configure_chained(self, quiet):
        quiet.configure(max_depth=1).configure({"hide": {"hidden": False}})
        assert quiet.options.max_depth == 1
        assert quiet.options.hide.hidden is False
        assert quiet.options.modifier is plain_modifier

    def test_defaults_untouched(self):
        Inspector(max_depth=2).configure(indent="\t")
        assert default_options().max_depth == 5
        assert default_options().indent == "   "

    def test_repr(self):
        assert repr(Inspector(max_depth=3)) == "Inspector(max_depth=3, pretty_print=True)"


class TestScenarios:
    def test_native_types(self, quiet):
        obj = {
            "number": 42,
            "string": "John Galt",
            "regexp": re.compile(r"[a-z]+"),
            "array": [99, 168, "x", {}],
            "func": lambda: None,
            "bool": False,
            "nil": None,
            "undef": UNSET,
            "object": {"attr": []},
        }
        out = quiet.inspect(obj, "native types")
        assert out.startswith("native types: {\n   number : 42,\n")
        assert "func" not in out
        assert "nil" not in out
        assert "undef" not in out

    def test_wrapped_types(self, quiet):
        obj = {"s": str("Hello"), "n": float(42), "b": bool(1)}
        assert quiet.inspect(obj, "wrapped types") == "wrapped types: {s : 'Hello', n : 42.0, b : True}"

    def test_circular_object(self, quiet):
        obj = {}
        obj["that"] = {"self": obj}
        obj["self"] = obj
        out = quiet.inspect(obj, "circular object")
        assert out.startswith("circular object: {")
        assert "[nested object]" in out

    def test_quotes(self, quiet):
        out = quiet.inspect(["hello 'world'", 'hello "world"'], "quoted")
        assert out == "quoted: ['hello \\'world\\'', 'hello \"world\"']"

    def test_null_in_array(self, quiet):
        assert quiet.inspect([None], "null in array") == "null in array: [[null]]"

    def test_nostream_colored(self):
        out = Inspector(stream=None).inspect({"hello": "moto"}, "nostream")
        assert "\x1b[" in out
        assert out.startswith(ansi_modifier("bold", "nostream: "))

    def test_function_shown(self, quiet):
        assert quiet.inspect({"run": run}, hide={"types": []}) == "{run : [function run(2)]}"

    def test_instance(self, quiet, point):
        assert quiet.inspect(point) == "{x : 1, y : 2, _tag : 'p'}"
        assert quiet.inspect(point, hide={"hidden": False}) == "{x : 1, y : 2}"

    def test_deep_list(self, quiet):
        assert quiet.inspect([[[[[[1]]]]]]) == "[[[[[[nested array]]]]]]"
