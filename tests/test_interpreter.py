"""Tests for the interpreter session and the top-level interpret() API."""

import pytest

from funcinterp import Interpreter, InterpreterConfig, interpret
from funcinterp.expressions import (
    ArityError,
    DivisionByZeroError,
    EvaluationError,
    FunctionRegistry,
    IntegerLiteral,
    ParseError,
    TypeMismatchError,
    UnknownFunctionError,
)


@pytest.fixture
def interpreter():
    return Interpreter()


class TestInterpret:
    """End-to-end evaluation of expression strings."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("ADD(1,2)", 3),
            ("MULTIPLY(2,MINUS(5,3))", 4),
            ("DIVIDE(7,2)", 3),
            ("ADD(1,MULTIPLY(2,3))", 7),
            ("42", 42),
            ("MINUS(ADD(10,5),MULTIPLY(DIVIDE(9,2),3))", (10 + 5) - ((9 // 2) * 3)),
            (" ADD( 100 , MINUS( 7 , 8 ) ) ", 100 + (7 - 8)),
        ],
    )
    def test_matches_direct_arithmetic(self, interpreter, source, expected):
        assert interpreter.interpret(source) == expected

    def test_module_level_interpret(self):
        assert interpret("ADD(1,2)") == 3
        assert interpret("MULTIPLY(2,MINUS(5,3))") == 4

    def test_division_by_zero(self, interpreter):
        with pytest.raises(DivisionByZeroError):
            interpreter.interpret("DIVIDE(1,0)")

    def test_unknown_function(self, interpreter):
        with pytest.raises(UnknownFunctionError):
            interpreter.interpret("UNKNOWN(1,2)")

    def test_insufficient_arguments(self, interpreter):
        with pytest.raises(ArityError):
            interpreter.interpret("ADD(1)")

    def test_malformed_structure(self, interpreter):
        with pytest.raises(ParseError):
            interpreter.interpret("ADD(1,2")

    def test_non_integer_result(self, interpreter):
        interpreter.registry.register("QUOTE", lambda args: args[0])

        with pytest.raises(TypeMismatchError):
            interpreter.interpret("QUOTE(ADD(1,2))")

    def test_session_keeps_no_state_between_calls(self, interpreter):
        with pytest.raises(DivisionByZeroError):
            interpreter.interpret("DIVIDE(1,0)")

        assert interpreter.interpret("ADD(1,2)") == 3
        assert interpreter.interpret("ADD(1,2)") == 3

    def test_deep_nesting_at_default_limit(self, interpreter):
        depth = 100
        source = "ADD(1," * depth + "0" + ")" * depth

        assert interpreter.interpret(source) == depth

        with pytest.raises(ParseError, match="maximum depth"):
            interpreter.interpret("ADD(1," * (depth + 1) + "0" + ")" * (depth + 1))

    def test_recursion_limit_is_reported_as_evaluation_error(self):
        interpreter = Interpreter(InterpreterConfig(max_depth=5000))
        depth = 2000
        source = "ADD(1," * depth + "0" + ")" * depth

        with pytest.raises(EvaluationError, match="nested too deeply"):
            interpreter.interpret(source)

        assert interpreter.interpret("ADD(1,2)") == 3


class TestStageComposition:
    """Running the stages one by one equals a single interpret() call."""

    @pytest.mark.parametrize(
        "source",
        ["ADD(1,2)", "MULTIPLY(2,MINUS(5,3))", "DIVIDE(MULTIPLY(7,3),MINUS(9,2))"],
    )
    def test_tokenize_build_evaluate(self, interpreter, source):
        tokens = interpreter.tokenize(source)
        tree = interpreter.build(tokens)
        result = interpreter.evaluate(tree)

        assert result == IntegerLiteral(interpreter.interpret(source))

    def test_build_from_source_string(self, interpreter):
        assert interpreter.build("ADD(1,2)") == interpreter.build(
            interpreter.tokenize("ADD(1,2)")
        )


class TestRegistryExtension:
    """Custom functions registered on a session."""

    def test_registered_function_is_callable(self, interpreter):
        interpreter.registry.register(
            "NEGATE", lambda args: IntegerLiteral(-args.integer(0))
        )

        assert interpreter.interpret("ADD(NEGATE(5),7)") == 2

    def test_registration_after_parse_before_evaluate(self, interpreter):
        tree = interpreter.build("SQUARE(MINUS(5,1))")

        interpreter.registry.register(
            "SQUARE", lambda args: IntegerLiteral(args.integer(0) ** 2)
        )

        assert interpreter.evaluate(tree) == IntegerLiteral(16)

    def test_short_circuit_function(self, interpreter):
        """A conditional evaluates only the branch it selects."""

        def if_nonzero(args):
            args.require(3)
            return args.evaluate(1 if args.integer(0) != 0 else 2)

        interpreter.registry.register("IF", if_nonzero)

        assert interpreter.interpret("IF(1,10,DIVIDE(1,0))") == 10
        assert interpreter.interpret("IF(MINUS(2,2),DIVIDE(1,0),20)") == 20

    def test_sessions_have_separate_registries(self):
        first = Interpreter()
        second = Interpreter()
        first.registry.register("ONE", lambda args: IntegerLiteral(1))

        assert first.interpret("ADD(ONE(0),1)") == 2
        with pytest.raises(UnknownFunctionError):
            second.interpret("ADD(ONE(0),1)")

    def test_explicit_registry(self):
        registry = FunctionRegistry()
        registry.register("ZERO", lambda args: IntegerLiteral(0))
        interpreter = Interpreter(registry=registry)

        assert interpreter.registry is registry
        assert interpreter.interpret("ZERO(1)") == 0
        with pytest.raises(UnknownFunctionError):
            interpreter.interpret("ADD(1,2)")


class TestConfiguredSession:
    """Interpreter behaviour driven by InterpreterConfig."""

    def test_default_width_wraps_at_32_bits(self, interpreter):
        assert interpreter.interpret("ADD(2147483647,1)") == -2147483648

    def test_wider_integers(self):
        interpreter = Interpreter(InterpreterConfig(integer_bits=64))

        assert interpreter.interpret("ADD(2147483647,1)") == 2147483648
        assert interpreter.interpret("4294967296") == 4294967296

    def test_strict_mode(self):
        lax = Interpreter()
        strict = Interpreter(InterpreterConfig(strict=True))

        assert lax.interpret("ADD(1,2) junk") == 3
        with pytest.raises(ParseError, match="Unexpected value 'junk'"):
            strict.interpret("ADD(1,2) junk")

    def test_max_depth(self):
        interpreter = Interpreter(InterpreterConfig(max_depth=1))

        assert interpreter.interpret("ADD(1,2)") == 3
        with pytest.raises(ParseError, match="maximum depth of 1"):
            interpreter.interpret("ADD(1,ADD(2,3))")
