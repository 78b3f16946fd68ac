import shutil
import tempfile
import unittest
from fake_python import DEBUG_FLAGS, FakePython, identity_lines
from pysysbuild.config import BuildRequest
from pysysbuild.errors import ConfigConflictError, InterpreterNotFoundError
from pysysbuild.resolver import Resolver, resolve_from_environment, version_cfgs
from pysysbuild.utils.platform_resolver import MacOSResolver, PosixResolver, WindowsResolver
from pysysbuild.version import PythonVersion

PY3_9_CFGS = [f"cargo:rustc-cfg=Py_3_{minor}" for minor in range(4, 10)]


class TestVersionCfgs(unittest.TestCase):

    def test_feature_levels(self):
        self.assertEqual(version_cfgs(PythonVersion(3, 6)), [
            "cargo:rustc-cfg=Py_3_4",
            "cargo:rustc-cfg=Py_3_5",
            "cargo:rustc-cfg=Py_3_6",
        ])

    def test_below_baseline(self):
        self.assertEqual(version_cfgs(PythonVersion(3, 3)), [])
        self.assertEqual(version_cfgs(PythonVersion(2, 7)), [])

    def test_limited_api_independent_of_minor(self):
        self.assertEqual(version_cfgs(PythonVersion(3, 3), limited_api=True), ["cargo:rustc-cfg=Py_LIMITED_API"])
        self.assertEqual(version_cfgs(PythonVersion(3, 4), limited_api=True), [
            "cargo:rustc-cfg=Py_LIMITED_API",
            "cargo:rustc-cfg=Py_3_4",
        ])
        self.assertEqual(version_cfgs(PythonVersion(2, 7), limited_api=True), [])


class TestResolver(unittest.TestCase):

    def test_end_to_end_release_build(self):
        fake = FakePython({"python": identity_lines()})
        output = Resolver(fake, PosixResolver()).resolve(BuildRequest(version=PythonVersion(3)))
        self.assertEqual(output.lines(), [
            "cargo:rustc-link-lib=python3.9",
            "cargo:rustc-link-search=native=/usr/lib",
        ] + PY3_9_CFGS + [
            'cargo:rustc-cfg=py_sys_config="WITH_THREAD"',
            "cargo:python_flags=FLAG_WITH_THREAD=1",
            "cargo:python_interpreter=/usr/bin/python3.9",
        ])
        self.assertNotIn("FLAG_Py_DEBUG", output.python_flags)
        self.assertFalse(any("DEBUG" in line for line in output.directives))

    def test_debug_build_derives_flags(self):
        fake = FakePython({"python3": identity_lines(ld_version="3.9d")}, flags=DEBUG_FLAGS)
        output = Resolver(fake, PosixResolver()).resolve(BuildRequest(version=PythonVersion(3, 9)))
        self.assertIn("cargo:rustc-link-lib=python3.9d", output.directives)
        for name in ("Py_DEBUG", "Py_TRACE_REFS", "Py_REF_DEBUG"):
            self.assertIn(f'cargo:rustc-cfg=py_sys_config="{name}"', output.directives)
        self.assertEqual(output.python_flags, "FLAG_WITH_THREAD=1,FLAG_Py_DEBUG=1,FLAG_Py_REF_DEBUG=1,FLAG_Py_TRACE_REFS=1")

    def test_flag_script_runs_on_resolved_executable(self):
        fake = FakePython({"python": identity_lines()})
        Resolver(fake, PosixResolver()).resolve(BuildRequest(version=PythonVersion(3)))
        self.assertEqual([name for name, _ in fake.calls], ["python", "/usr/bin/python3.9"])

    def test_macos_reuses_resolved_interpreter(self):
        fake = FakePython({"python3": identity_lines(executable="/opt/homebrew/bin/python3.9")})
        output = Resolver(fake, MacOSResolver()).resolve(BuildRequest(version=PythonVersion(3, 9)))
        self.assertEqual(fake.probed, ["python", "python3"])
        self.assertEqual(output.directives[0], "cargo:rustc-link-lib=python3.9")

    def test_windows_uses_fallback_table(self):
        fake = FakePython({"python": identity_lines(
            executable="C:\\Python38\\python.exe", version=(3, 8), libdir="None",
            shared="None", ld_version="38", exec_prefix="C:\\Python38")})
        request = BuildRequest(version=PythonVersion(3, 8), fallback_overrides={"Py_DEBUG": "1"})
        output = Resolver(fake, WindowsResolver()).resolve(request)
        self.assertEqual(output.directives[:2], [
            "cargo:rustc-link-lib=pythonXY:python38",
            "cargo:rustc-link-search=native=C:\\Python38\\libs",
        ])
        self.assertIn('cargo:rustc-cfg=py_sys_config="Py_UNICODE_SIZE_2"', output.directives)
        self.assertIn('cargo:rustc-cfg=py_sys_config="Py_REF_DEBUG"', output.directives)
        self.assertEqual(len(fake.calls), 1)

    def test_not_found(self):
        with self.assertRaises(InterpreterNotFoundError):
            Resolver(FakePython(), PosixResolver()).resolve(BuildRequest(version=PythonVersion(3, 12)))


class TestResolveFromEnvironment(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_link_mode_conflict_before_any_probe(self):
        fake = FakePython({"python": identity_lines()})
        environ = {
            "CARGO_FEATURE_PYTHON_3": "1",
            "CARGO_FEATURE_LINK_MODE_DEFAULT": "1",
            "CARGO_FEATURE_LINK_MODE_UNRESOLVED_STATIC": "1",
        }
        with self.assertRaises(ConfigConflictError):
            resolve_from_environment(self.test_dir, environ, runner=fake, platform=PosixResolver())
        self.assertEqual(fake.calls, [])

    def test_environment_request(self):
        fake = FakePython({"/opt/py/bin/python3": identity_lines(executable="/opt/py/bin/python3")})
        environ = {
            "CARGO_FEATURE_PYTHON_3_9": "1",
            "PYTHON_SYS_EXECUTABLE": "/opt/py/bin/python3",
            "CARGO_FEATURE_EXTENSION_MODULE": "1",
        }
        output = resolve_from_environment(self.test_dir, environ, runner=fake, platform=PosixResolver())
        self.assertEqual(fake.probed, ["/opt/py/bin/python3"])
        self.assertFalse(any("rustc-link" in line for line in output.directives))
        self.assertEqual(output.lines()[-1], "cargo:python_interpreter=/opt/py/bin/python3")

if __name__ == '__main__':
    unittest.main()
