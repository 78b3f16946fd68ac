import unittest
from pysysbuild.errors import ConfigurationError, ExtractionShapeError
from pysysbuild.sysconfig_vars import (
    SYSCONFIG_VARS,
    VarKind,
    build_config_vars_script,
    fallback_config_vars,
    kind_of,
    parse_config_vars,
    query_config_vars,
)

class TestSysconfigVars(unittest.TestCase):

    def test_kinds(self):
        self.assertIs(kind_of("Py_DEBUG"), VarKind.FLAG)
        self.assertIs(kind_of("Py_UNICODE_SIZE"), VarKind.VALUE)
        self.assertIs(kind_of("SOMETHING_NEW"), VarKind.FLAG)

    def test_script_prints_every_var_in_order(self):
        script = build_config_vars_script()
        positions = [script.index(f"'{var.name}'") for var in SYSCONFIG_VARS]
        self.assertEqual(positions, sorted(positions))
        self.assertIn("config.get('Py_DEBUG', 0)", script)
        self.assertIn("config.get('Py_UNICODE_SIZE', None)", script)

    def test_parse_drops_missing_values(self):
        config_map = parse_config_vars("1\n0\n1\n0\n0\n0\n0\nNone\n")
        self.assertNotIn("Py_UNICODE_SIZE", config_map)
        self.assertEqual(config_map["Py_USING_UNICODE"], "1")
        self.assertEqual(config_map["Py_DEBUG"], "0")
        self.assertEqual(len(config_map), len(SYSCONFIG_VARS) - 1)

    def test_parse_keeps_present_values(self):
        config_map = parse_config_vars("1\n1\n1\n0\n0\n0\n0\n4\n")
        self.assertEqual(config_map["Py_UNICODE_SIZE"], "4")

    def test_parse_wrong_line_count(self):
        with self.assertRaises(ExtractionShapeError):
            parse_config_vars("1\n0\n")

    def test_query_uses_runner(self):
        calls = []
        def runner(interpreter, script):
            calls.append(interpreter)
            return "0\n0\n1\n1\n0\n0\n0\nNone\n"
        config_map = query_config_vars("/usr/bin/python3-dbg", runner)
        self.assertEqual(calls, ["/usr/bin/python3-dbg"])
        self.assertEqual(config_map["Py_DEBUG"], "1")

    def test_fallback_table(self):
        self.assertEqual(fallback_config_vars(), {
            "Py_USING_UNICODE": "1",
            "Py_UNICODE_WIDE": "0",
            "WITH_THREAD": "1",
            "Py_UNICODE_SIZE": "2",
        })

    def test_fallback_overrides(self):
        config_map = fallback_config_vars({"Py_DEBUG": True, "Py_UNICODE_SIZE": 4})
        self.assertEqual(config_map["Py_DEBUG"], "1")
        self.assertEqual(config_map["Py_UNICODE_SIZE"], "4")

    def test_fallback_unknown_override(self):
        with self.assertRaises(ConfigurationError):
            fallback_config_vars({"Py_GIL_DISABLED": "1"})

if __name__ == '__main__':
    unittest.main()
