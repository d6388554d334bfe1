import unittest
import tempfile
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from secretgate.config import load_config, load_yaml_config, ConfigError, GateConfig

BASE_ENV = {"USERNAME": "admin", "PASSWORD": "secret123", "SECRET_MESSAGE": "hidden"}

class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, content):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_from_environment(self):
        cfg = load_config(env_file=None, environ=BASE_ENV)
        self.assertEqual(cfg.username, "admin")
        self.assertEqual(cfg.password, "secret123")
        self.assertEqual(cfg.secret_message, "hidden")
        self.assertEqual(cfg.host, "127.0.0.1")
        self.assertEqual(cfg.port, 3000)
        self.assertIsNone(cfg.audit_log)
        self.assertFalse(cfg.debug)

    def test_missing_values_fail_fast(self):
        with self.assertRaises(ConfigError) as cm:
            load_config(env_file=None, environ={"USERNAME": "admin"})
        self.assertEqual(cm.exception.missing, ["PASSWORD", "SECRET_MESSAGE"])
        self.assertIn("PASSWORD", str(cm.exception))

    def test_blank_values_count_as_missing(self):
        env = dict(BASE_ENV, PASSWORD="   ")
        with self.assertRaises(ConfigError) as cm:
            load_config(env_file=None, environ=env)
        self.assertEqual(cm.exception.missing, ["PASSWORD"])

    def test_prefixed_name_wins(self):
        env = dict(BASE_ENV, SECRETGATE_USERNAME="operator")
        self.assertEqual(load_config(env_file=None, environ=env).username, "operator")

    def test_dotenv_file(self):
        path = self.write(".env", "USERNAME=dot\nPASSWORD=env\nSECRET_MESSAGE=from dotenv\nPORT=8080\n")
        cfg = load_config(env_file=path, environ={})
        self.assertEqual((cfg.username, cfg.password, cfg.secret_message), ("dot", "env", "from dotenv"))
        self.assertEqual(cfg.port, 8080)

    def test_environment_overrides_dotenv(self):
        path = self.write(".env", "USERNAME=dot\nPASSWORD=env\nSECRET_MESSAGE=from dotenv\n")
        cfg = load_config(env_file=path, environ={"USERNAME": "shell"})
        self.assertEqual(cfg.username, "shell")
        self.assertEqual(cfg.password, "env")

    def test_missing_default_dotenv_is_ignored(self):
        cwd = os.getcwd()
        os.chdir(self.tmp.name)
        try:
            cfg = load_config(environ=BASE_ENV)
        finally:
            os.chdir(cwd)
        self.assertEqual(cfg.username, "admin")

    def test_missing_named_dotenv_is_an_error(self):
        path = os.path.join(self.tmp.name, "nope.env")
        with self.assertRaises(ConfigError) as cm:
            load_config(env_file=path, environ=BASE_ENV)
        self.assertIn(path, str(cm.exception))

    def test_prefixed_dotenv_beats_bare_environment(self):
        # The OS may export USERNAME; a prefixed key anywhere must still win.
        path = self.write(".env", "SECRETGATE_USERNAME=admin\n")
        env = dict(BASE_ENV, USERNAME="jdoe")
        self.assertEqual(load_config(env_file=path, environ=env).username, "admin")

    def test_prefixed_yaml_beats_bare_environment(self):
        path = self.write("gate.yaml", "secretgate_username: admin\n")
        env = dict(BASE_ENV, USERNAME="jdoe")
        self.assertEqual(load_config(env_file=None, config_path=path, environ=env).username, "admin")

    def test_cli_overrides_beat_prefixed_environment(self):
        env = dict(BASE_ENV, SECRETGATE_PORT="5000")
        self.assertEqual(load_config(env_file=None, environ=env, overrides={"port": 9000}).port, 9000)

    def test_yaml_is_lowest_precedence(self):
        path = self.write("gate.yaml", "username: yaml-user\npassword: yaml-pass\nsecret_message: from yaml\nport: 5000\ndebug: true\n")
        cfg = load_config(env_file=None, config_path=path, environ={"PASSWORD": "env-pass"})
        self.assertEqual(cfg.username, "yaml-user")
        self.assertEqual(cfg.password, "env-pass")
        self.assertEqual(cfg.port, 5000)
        self.assertTrue(cfg.debug)

    def test_yaml_path_from_environment(self):
        path = self.write("gate.yaml", "username: a\npassword: b\nsecret_message: c\n")
        cfg = load_config(env_file=None, environ={"SECRETGATE_CONFIG": path})
        self.assertEqual(cfg.secret_message, "c")

    def test_overrides_win(self):
        cfg = load_config(env_file=None, environ=BASE_ENV, overrides={"port": 9000, "host": None, "debug": True})
        self.assertEqual(cfg.port, 9000)
        self.assertEqual(cfg.host, "127.0.0.1")
        self.assertTrue(cfg.debug)

    def test_bad_port(self):
        for port in ["abc", "70000", "-1"]:
            with self.assertRaises(ConfigError):
                load_config(env_file=None, environ=dict(BASE_ENV, PORT=port))

    def test_yaml_scalars_stay_strings(self):
        path = self.write("gate.yaml", "username: yes\npassword: 0123\nsecret_message: 1e3\n")
        cfg = load_config(env_file=None, config_path=path, environ={})
        self.assertEqual(cfg.username, "yes")
        self.assertEqual(cfg.password, "0123")
        self.assertEqual(cfg.secret_message, "1e3")

    def test_yaml_must_be_mapping(self):
        path = self.write("list.yaml", "- a\n- b\n")
        with self.assertRaises(ConfigError):
            load_yaml_config(path)

    def test_unreadable_yaml(self):
        with self.assertRaises(ConfigError):
            load_yaml_config(os.path.join(self.tmp.name, "missing.yaml"))

class TestGateConfig(unittest.TestCase):
    def test_summary_masks_secrets(self):
        cfg = GateConfig(username="admin", password="secret123", secret_message="hidden")
        summary = cfg.summary()
        self.assertEqual(summary["password"], "*********")
        self.assertNotIn("hidden", str(summary))
        self.assertNotIn("secret123", repr(cfg))

if __name__ == '__main__':
    unittest.main()
