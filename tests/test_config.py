"""Tests for cycletime.config."""

from __future__ import annotations

import pytest

from cycletime.config import Settings

_ENV_VARS = (
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_ENDPOINT_URL",
    "CYCLETIME_NAMESPACE",
    "LOG_LEVEL",
    "LOG_DIR",
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_defaults(self) -> None:
        cfg = Settings()
        assert cfg.AWS_REGION == "eu-central-1"
        assert cfg.AWS_ACCESS_KEY_ID is None
        assert cfg.CYCLETIME_NAMESPACE == "empty"
        assert cfg.full_namespace == "Cycletime/empty"
        assert cfg.LOG_DIR is None

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.setenv("CYCLETIME_NAMESPACE", "ci")
        cfg = Settings()
        assert cfg.AWS_REGION == "eu-west-1"
        assert cfg.full_namespace == "Cycletime/ci"

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        assert Settings(AWS_REGION="us-east-2").AWS_REGION == "us-east-2"


class TestToBoto3Kwargs:
    def test_region_only(self) -> None:
        assert Settings().to_boto3_kwargs() == {"region_name": "eu-central-1"}

    def test_with_credentials_and_endpoint(self) -> None:
        cfg = Settings(
            AWS_ACCESS_KEY_ID="AKID",
            AWS_SECRET_ACCESS_KEY="SECRET",
            AWS_ENDPOINT_URL="http://localhost:4566",
        )
        assert cfg.to_boto3_kwargs() == {
            "region_name": "eu-central-1",
            "aws_access_key_id": "AKID",
            "aws_secret_access_key": "SECRET",
            "endpoint_url": "http://localhost:4566",
        }


class TestLoadYaml:
    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings().load_yaml(str(tmp_path / "nope.yaml"))

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "logging.yaml"
        path.write_text("version: 1\nroot:\n  level: INFO\n", encoding="utf-8")
        assert Settings().load_yaml(str(path)) == {"version": 1, "root": {"level": "INFO"}}
