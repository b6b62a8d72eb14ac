from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for function-call tests")
class UserFunctionTests(unittest.TestCase):
    def test_define_and_call(self) -> None:
        from calc_jax import Environment, Scalar, evaluate

        env = Environment()
        self.assertEqual(evaluate("f(x) = x ^ 2", env), Scalar(0.0))
        self.assertEqual(evaluate("f(3)", env), Scalar(9.0))
        self.assertEqual(evaluate("f(1 + 1) + 1", env), Scalar(5.0))

    def test_reverse_definition(self) -> None:
        from calc_jax import Environment, Scalar, evaluate

        env = Environment()
        evaluate("x * 10 => g(x)", env)
        self.assertEqual(evaluate("g(4)", env), Scalar(40.0))

    def test_multiple_parameters_and_nested_calls(self) -> None:
        from calc_jax import Environment, Scalar, evaluate

        env = Environment()
        evaluate("add(a, b) = a + b", env)
        evaluate("sq(x) = x * x", env)
        self.assertEqual(evaluate("add(2, 3 * 4)", env), Scalar(14.0))
        self.assertEqual(evaluate("sq(sq(3))", env), Scalar(81.0))
        self.assertEqual(evaluate("add(sq(2), -1)", env), Scalar(3.0))

    def test_function_body_sees_caller_bindings(self) -> None:
        from calc_jax import Environment, Scalar, evaluate

        env = Environment()
        evaluate("k = 10", env)
        evaluate("scale(x) = k * x", env)
        self.assertEqual(evaluate("scale(2)", env), Scalar(20.0))
        evaluate("k = 100", env)
        self.assertEqual(evaluate("scale(2)", env), Scalar(200.0))

    def test_zero_parameter_function(self) -> None:
        from calc_jax import Environment, Scalar, WrongArgumentCount, evaluate

        env = Environment()
        evaluate("seven() = 7", env)
        self.assertEqual(evaluate("seven()", env), Scalar(7.0))
        with self.assertRaises(WrongArgumentCount):
            evaluate("seven(1)", env)

    def test_call_does_not_mutate_caller(self) -> None:
        from calc_jax import Environment, Scalar, UnknownIdentifier, evaluate

        env = Environment()
        evaluate("a = 1", env)
        evaluate("g(x) = (x => a)", env)
        self.assertEqual(evaluate("g(5)", env), Scalar(5.0))
        self.assertEqual(env["a"], Scalar(1.0))
        with self.assertRaises(UnknownIdentifier):
            evaluate("x", env)

    def test_assignments_inside_arguments_stay_in_the_call(self) -> None:
        from calc_jax import Environment, UnknownIdentifier, evaluate

        env = Environment()
        self.assertAlmostEqual(float(evaluate("sin(t = 30)", env)), 0.5)
        with self.assertRaises(UnknownIdentifier):
            evaluate("t", env)

    def test_wrong_argument_count_leaves_environment_unchanged(self) -> None:
        from calc_jax import Environment, WrongArgumentCount, evaluate

        env = Environment()
        evaluate("f(x, y) = x + y", env)
        before_vars = dict(env)
        before_funcs = dict(env.functions)
        with self.assertRaises(WrongArgumentCount) as ctx:
            evaluate("f(z = 1)", env)
        self.assertEqual((ctx.exception.expected, ctx.exception.given), (2, 1))
        self.assertEqual(dict(env), before_vars)
        self.assertEqual(dict(env.functions), before_funcs)

    def test_vector_arguments(self) -> None:
        from calc_jax import Environment, Vector, evaluate

        env = Environment()
        evaluate("double(v) = 2 * v", env)
        self.assertEqual(evaluate("double([1;2])", env), Vector((2.0, 4.0)))

    def test_unbounded_recursion_is_not_a_calculator_error(self) -> None:
        from calc_jax import Environment, evaluate

        env = Environment()
        evaluate("loop(x) = loop(x)", env)
        with self.assertRaises(RecursionError):
            evaluate("loop(1)", env)

    def test_definition_does_not_touch_variables(self) -> None:
        from calc_jax import Environment, evaluate
        from calc_jax.evaluator import defines_function
        from calc_jax.parser import parse

        env = Environment()
        evaluate("h(x) = nosuch + x", env)
        self.assertNotIn("h", env)
        self.assertEqual(env.lookup_function("h").params, ("x",))
        self.assertTrue(defines_function(parse("h(x) = x")))
        self.assertTrue(defines_function(parse("(x => h(x))")))
        self.assertFalse(defines_function(parse("h = 1")))
        self.assertFalse(defines_function(parse("h(2)")))


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for function-call tests")
class BuiltinFunctionTests(unittest.TestCase):
    def test_scalar_builtins(self) -> None:
        from calc_jax import Scalar, evaluate

        self.assertEqual(evaluate("sqrt(16)"), Scalar(4.0))
        self.assertEqual(evaluate("abs(-3)"), Scalar(3.0))
        self.assertEqual(evaluate("floor(2.7) + ceil(2.2)"), Scalar(5.0))
        self.assertAlmostEqual(float(evaluate("ln(e)")), 1.0)
        self.assertAlmostEqual(float(evaluate("log(1000)")), 3.0)
        self.assertAlmostEqual(float(evaluate("exp(0)")), 1.0)
        self.assertEqual(evaluate("max(1, 5, 3)"), Scalar(5.0))
        self.assertEqual(evaluate("min(4, -2)"), Scalar(-2.0))

    def test_call_without_parentheses(self) -> None:
        from calc_jax import Scalar, evaluate

        self.assertEqual(evaluate("sqrt 9"), Scalar(3.0))

    def test_trig_honors_degree_mode(self) -> None:
        from calc_jax import Environment, TrigMode, evaluate

        env = Environment(trig_mode=TrigMode.DEG)
        self.assertAlmostEqual(float(evaluate("sin(30)", env)), 0.5)
        self.assertAlmostEqual(float(evaluate("cos(60)", env)), 0.5)
        self.assertAlmostEqual(float(evaluate("asin(1)", env)), 90.0)

    def test_trig_honors_radian_mode(self) -> None:
        from calc_jax import Environment, evaluate

        env = Environment(trig_mode="rad")
        self.assertAlmostEqual(float(evaluate("sin(pi / 2)", env)), 1.0)
        self.assertAlmostEqual(float(evaluate("atan(1)", env)), math.pi / 4)

    def test_builtin_argument_errors(self) -> None:
        from calc_jax import BadFunctionArguments, UnknownIdentifier, WrongArgumentCount, evaluate

        with self.assertRaises(BadFunctionArguments):
            evaluate("sqrt([1;4])")
        with self.assertRaises(WrongArgumentCount):
            evaluate("sqrt(1, 2)")
        with self.assertRaises(WrongArgumentCount):
            evaluate("max()")
        with self.assertRaises(UnknownIdentifier):
            evaluate("nosuch(1)")

    def test_user_function_shadows_builtin(self) -> None:
        from calc_jax import Environment, Scalar, evaluate

        env = Environment()
        evaluate("sqrt(x) = x", env)
        self.assertEqual(evaluate("sqrt(16)", env), Scalar(16.0))


if __name__ == "__main__":
    unittest.main()
