import sys
import unittest

from atmfjstc.lib.code_builder import CodeBuilder, BuilderOptions


class PutTest(unittest.TestCase):
    def test_hello(self):
        builder = CodeBuilder()

        builder.put("Hello")
        self.assertEqual(builder.data, "Hello\n")

    def test_with_indent(self):
        builder = CodeBuilder()

        builder.put("Hello")
        builder.with_indent(lambda b: b.put("World"))

        self.assertEqual(builder.data, "Hello\n\tWorld\n")

    def test_no_indent_no_newline(self):
        builder = CodeBuilder()
        builder.entab()

        builder.put("a", auto_indent=False)
        builder.put("b", auto_newline=False)
        builder.put("c", auto_indent=False, auto_newline=False)

        self.assertEqual(builder.data, "a\n\tbc")

    def test_chunks_formatted_independently(self):
        builder = CodeBuilder()
        builder.entab()

        builder.put(["one", "two"])
        builder.put(("three", "four"), auto_newline=False)

        self.assertEqual(builder.data, "\tone\n\ttwo\n\tthree\tfour")

    def test_chunks_from_generator(self):
        builder = CodeBuilder()

        builder.put(line for line in "x = 1\ny = 2".splitlines())

        self.assertEqual(builder.data, "x = 1\ny = 2\n")

    def test_iadd(self):
        builder = CodeBuilder()

        builder += "foo();"
        builder += ["bar();", "baz();"]

        self.assertEqual(builder.data, "foo();\nbar();\nbaz();\n")

    def test_rejects_non_text(self):
        builder = CodeBuilder()

        with self.assertRaises(TypeError):
            builder.put(42)
        with self.assertRaises(TypeError):
            builder.put(["ok", 42])

        self.assertEqual(builder.data, "")

    def test_put_formatted(self):
        builder = CodeBuilder()

        builder.put_formatted("{} {name};", "int", name="six")

        self.assertEqual(builder.data, "int six;\n")

    def test_put_quoted(self):
        builder = CodeBuilder()

        builder.put("Hello")
        builder.put_quoted("World!")

        self.assertEqual(builder.data, "Hello\n\"World!\"")

    def test_data_has_no_side_effects(self):
        builder = CodeBuilder()

        builder.put("a")
        self.assertEqual(builder.data, "a\n")
        self.assertEqual(builder.data, "a\n")

        builder.put("b")
        self.assertEqual(builder.data, "a\nb\n")
        self.assertEqual(str(builder), "a\nb\n")

    def test_empty(self):
        self.assertEqual(CodeBuilder().data, "")


class IndentTest(unittest.TestCase):
    def test_balanced(self):
        builder = CodeBuilder()

        builder.entab()
        builder.entab()
        builder.detab()
        builder.entab()
        builder.detab()
        builder.detab()

        self.assertEqual(builder.indent_depth, 0)

    def test_detab_clamps_at_zero(self):
        builder = CodeBuilder()

        builder.entab()
        builder.detab()
        builder.detab()
        builder.detab()

        self.assertEqual(builder.indent_depth, 0)

        builder.put("x")
        self.assertEqual(builder.data, "x\n")

    def test_entab_saturates(self):
        builder = CodeBuilder()
        builder._indent_depth = sys.maxsize

        builder.entab()

        self.assertEqual(builder.indent_depth, sys.maxsize)

    def test_indent_restored_on_error(self):
        builder = CodeBuilder()

        def _body(b):
            b.put("partial")
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            builder.with_indent(_body)

        self.assertEqual(builder.indent_depth, 0)
        self.assertEqual(builder.data, "\tpartial\n")

    def test_indented_context(self):
        builder = CodeBuilder()

        with builder.indented():
            builder.put("a")
            with builder.indented():
                builder.put("b")

        builder.put("c")

        self.assertEqual(builder.data, "\ta\n\t\tb\nc\n")

    def test_with_scope(self):
        builder = CodeBuilder()

        builder.with_scope(lambda b: b.with_scope(lambda b2: b2.put("x;")))

        self.assertEqual(builder.data, "{\n\t{\n\t\tx;\n\t}\n}\n")

    def test_custom_options(self):
        builder = CodeBuilder(BuilderOptions().derive(indent_width=4, newline="\r\n"))

        builder.with_scope(lambda b: b.put("x;"))

        self.assertEqual(builder.data, "{\r\n    x;\r\n}\r\n")


class SuspendTest(unittest.TestCase):
    def test_disable_enable_pair_is_neutral(self):
        for indent, newline in [(True, True), (True, False), (False, True), (False, False)]:
            with self.subTest(indent=indent, newline=newline):
                builder = CodeBuilder()
                builder.entab()

                builder.disable(indent, newline)
                builder.enable(indent, newline)
                builder.put("x")

                self.assertEqual(builder.data, "\tx\n")
                self.assertEqual(builder.indent_suspend_count, 0)
                self.assertEqual(builder.newline_suspend_count, 0)

    def test_independent_flags(self):
        builder = CodeBuilder()
        builder.entab()

        builder.disable(indent=False)
        builder.put("a")
        builder.enable(indent=False)

        builder.disable(newline=False)
        builder.put("b")
        builder.enable(newline=False)

        self.assertEqual(builder.data, "\tab\n")

    def test_nested_suspend_needs_matching_enables(self):
        builder = CodeBuilder()
        builder.entab()

        builder.disable()
        builder.disable()
        builder.put("a")
        builder.enable()
        builder.put("b")
        builder.enable()
        builder.put("c")

        self.assertEqual(builder.data, "ab\tc\n")

    def test_enable_clamps_at_zero(self):
        builder = CodeBuilder()

        builder.enable()
        builder.enable(indent=False)

        self.assertEqual(builder.indent_suspend_count, 0)
        self.assertEqual(builder.newline_suspend_count, 0)

        builder.disable()
        builder.put("a")

        self.assertEqual(builder.data, "a")

    def test_disable_saturates(self):
        builder = CodeBuilder()
        builder._indent_suspend_count = sys.maxsize

        builder.disable()

        self.assertEqual(builder.indent_suspend_count, sys.maxsize)
        self.assertEqual(builder.newline_suspend_count, 1)

    def test_suspended_restores_on_error(self):
        builder = CodeBuilder()

        with self.assertRaises(ValueError):
            with builder.suspended():
                builder.put("a")
                raise ValueError()

        builder.put("b")

        self.assertEqual(builder.data, "ab\n")
        self.assertEqual(builder.indent_suspend_count, 0)
        self.assertEqual(builder.newline_suspend_count, 0)


    def test_clamping_is_logged(self):
        builder = CodeBuilder()

        with self.assertLogs('atmfjstc.lib.code_builder', level='DEBUG') as cm:
            builder.enable(indent=False)

        self.assertEqual(len(cm.records), 1)
        self.assertIn("newline suspend count", cm.output[0])


class BuilderOptionsTest(unittest.TestCase):
    def test_defaults(self):
        options = BuilderOptions()

        self.assertEqual((options.indent, options.newline, options.quote), ('\t', '\n', '"'))

    def test_derive(self):
        options = BuilderOptions()
        derived = options.derive(quote="'")

        self.assertEqual(derived, BuilderOptions(quote="'"))
        self.assertEqual(options.quote, '"')

    def test_quote_used_by_put_quoted(self):
        builder = CodeBuilder(BuilderOptions(quote="'"))

        builder.add_func_call("puts", "hi")

        self.assertEqual(builder.data, "puts('hi');\n")


class DeterminismTest(unittest.TestCase):
    def test_same_calls_same_output(self):
        def _generate():
            builder = CodeBuilder()

            builder.add_import("std.stdio", ["writeln"])
            builder.add_func_declaration("void", "main", [], lambda b: b.add_func_call("writeln", "Hi", 1, True))

            return builder.data

        self.assertEqual(_generate(), _generate())


if __name__ == '__main__':
    unittest.main()
