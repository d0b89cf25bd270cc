"""Tests for vendor option resolution."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.workspace import write_yaml


class TestLoadOptions:
    def test_defaults(self, tmp_path: Path) -> None:
        """Options without config, env or overrides fall back to defaults."""
        from depvendor.core.config import load_options

        options = load_options(tmp_path)

        assert options.enable_deps is True
        assert options.fetch is True
        assert options.vendor_dir is None
        assert options.external_dir == tmp_path / ".depvendor" / "external"
        assert options.threads >= 1
        assert options.sync_jobs == 1

    def test_config_file(self, tmp_path: Path) -> None:
        """Values under vendor: in config.yaml are applied."""
        from depvendor.core.config import load_options

        write_yaml(
            tmp_path / ".depvendor" / "config.yaml",
            """
            vendor:
              vendorDir: third_party/vendor
              enableDeps: false
              threads: 3
              syncJobs: 2
              logLevel: debug
            """,
        )

        options = load_options(tmp_path)

        assert options.vendor_dir == tmp_path / "third_party" / "vendor"
        assert options.enable_deps is False
        assert options.threads == 3
        assert options.sync_jobs == 2
        assert options.log_level == "debug"

    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """CLI overrides beat environment variables, which beat the config file."""
        from depvendor.core.config import load_options

        write_yaml(
            tmp_path / ".depvendor" / "config.yaml",
            """
            vendor:
              vendorDir: from-file
              threads: 2
              fetch: true
            """,
        )
        monkeypatch.setenv("DEPVENDOR_VENDOR_DIR", "from-env")
        monkeypatch.setenv("DEPVENDOR_THREADS", "5")
        monkeypatch.setenv("DEPVENDOR_FETCH", "no")

        options = load_options(tmp_path, {"vendor_dir": "/abs/from-cli", "threads": None})

        assert options.vendor_dir == Path("/abs/from-cli")
        assert options.threads == 5
        assert options.fetch is False

    @pytest.mark.parametrize(
        "env",
        [
            {"DEPVENDOR_THREADS": "many"},
            {"DEPVENDOR_ENABLE_DEPS": "maybe"},
            {"DEPVENDOR_SYNC_JOBS": "0"},
        ],
    )
    def test_invalid_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, env: dict[str, str]
    ) -> None:
        """Out-of-range values raise ConfigError."""
        from depvendor.core.config import load_options
        from depvendor.core.exceptions import ConfigError

        for key, value in env.items():
            monkeypatch.setenv(key, value)

        with pytest.raises(ConfigError):
            load_options(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """A config file that is not valid YAML raises ConfigError."""
        from depvendor.core.config import load_options
        from depvendor.core.exceptions import ConfigError

        path = tmp_path / ".depvendor" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("vendor: [\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_options(tmp_path)

    def test_unknown_keys_warn(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown keys in the vendor section are logged, not rejected."""
        from depvendor.core.config import load_options

        write_yaml(
            tmp_path / ".depvendor" / "config.yaml",
            """
            vendor:
              vendorDirectory: typo
            """,
        )

        with caplog.at_level("WARNING"):
            load_options(tmp_path)

        assert "vendorDirectory" in caplog.text


class TestDepVendorError:
    def test_to_json_error(self) -> None:
        """ConfigError serializes to the common JSON error shape."""
        from depvendor.core.exceptions import ConfigError

        err = ConfigError("bad value", context={"option": "threads"})

        assert err.to_json_error() == {
            "message": "bad value",
            "code": "ConfigError",
            "context": {"option": "threads"},
        }
        assert isinstance(err, ValueError)
