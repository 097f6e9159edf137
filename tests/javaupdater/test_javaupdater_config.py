"""
Tests for configuration loading and the command line entry point.
"""

import json
import logging

import pytest

from javaupdater import cli
from javaupdater.java_updater import JavaUpdater, UpdateResult, UpdateStatus
from javaupdater.javaupdater_config import JavaUpdaterConfig, Platform
from javaupdater.javaupdater_exceptions import JavaUpdaterException, UnsupportedVendorError
from javaupdater.javaupdater_logger import JavaUpdaterLogger


class TestJavaUpdaterConfig:
    def test_from_dict_ignores_unknown_keys(self):
        config = JavaUpdaterConfig.from_dict(
            {"java_version": 21, "platform": "MAC", "unknown": True}
        )

        assert config.java_version == "21"
        assert config.platform == Platform.MAC
        assert config.java_vendor == "adoptium"

    def test_invalid_platform_rejected(self):
        with pytest.raises(JavaUpdaterException):
            JavaUpdaterConfig.from_dict({"platform": "solaris"})

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(JavaUpdaterException):
            JavaUpdaterConfig(platform=Platform.LINUX, request_timeout=0)

    def test_from_toml(self, tmp_path):
        path = tmp_path / "javaupdater.toml"
        path.write_text(
            '[javaupdater]\njava_version = "11"\nplatform = "windows"\n'
            f'install_root = "{tmp_path.as_posix()}"\nrequest_timeout = 5\n',
            encoding="utf-8",
        )

        config = JavaUpdaterConfig.from_toml(str(path))

        assert config.java_version == "11"
        assert config.platform == Platform.WINDOWS
        assert config.install_root == tmp_path.as_posix()
        assert config.request_timeout == 5

    def test_from_toml_missing_file(self, tmp_path):
        with pytest.raises(JavaUpdaterException):
            JavaUpdaterConfig.from_toml(str(tmp_path / "missing.toml"))

    def test_from_toml_invalid_syntax(self, tmp_path):
        path = tmp_path / "javaupdater.toml"
        path.write_text("[javaupdater\n", encoding="utf-8")

        with pytest.raises(JavaUpdaterException):
            JavaUpdaterConfig.from_toml(str(path))


class TestJavaUpdaterLogger:
    def test_log_emits_structured_line(self, caplog):
        logger = JavaUpdaterLogger()

        with caplog.at_level(logging.INFO, logger="javaupdater"):
            logger.log("Update found 0 -> 35\nnext line", logging.INFO)

        line = json.loads(caplog.records[-1].getMessage())
        assert line["level"] == "INFO"
        assert line["message"] == "Update found 0 -> 35 next line"
        assert line["caller_name"] == "test_log_emits_structured_line"


class TestCli:
    def test_flags_override_toml(self, tmp_path, monkeypatch):
        path = tmp_path / "javaupdater.toml"
        path.write_text('[javaupdater]\njava_version = "11"\nplatform = "linux"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        args = cli.build_parser().parse_args(["--java-version", "21", "--install-root", str(tmp_path)])

        config = cli.load_config(args)

        assert config.java_version == "21"
        assert config.platform == Platform.LINUX
        assert config.install_root == str(tmp_path)

    def test_main_reports_result(self, tmp_path, monkeypatch, capsys):
        executed = []

        def fake_execute(self, java_version, java_vendor):
            executed.append((java_version, java_vendor))
            return UpdateResult(UpdateStatus.ALREADY_UP_TO_DATE, java_version, java_vendor, self.install_dir, 35, 35)

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(JavaUpdater, "execute", fake_execute)

        code = cli.main(["--platform", "linux", "--install-root", str(tmp_path)])

        assert code == 0
        assert executed == [("17", "adoptium")]
        assert "already_up_to_date" in capsys.readouterr().out

    def test_main_returns_error_code_on_failure(self, tmp_path, monkeypatch):
        def fake_execute(self, java_version, java_vendor):
            raise UnsupportedVendorError(f"The provided Java vendor '{java_vendor}' is currently not supported!")

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(JavaUpdater, "execute", fake_execute)

        code = cli.main(["--vendor", "zulu", "--platform", "linux", "--install-root", str(tmp_path)])

        assert code == 1


class TestJavaUpdaterFromConfig:
    def test_builds_updater_from_config(self, tmp_path, logger):
        config = JavaUpdaterConfig(platform=Platform.MAC, install_root=str(tmp_path), request_timeout=3, page_size=20)

        updater = JavaUpdater.from_config(config, logger)

        assert updater.install_dir == tmp_path / "jdk" / "mac"
        assert updater.install_dir.is_dir()
        assert updater.catalog_client.timeout == 3
