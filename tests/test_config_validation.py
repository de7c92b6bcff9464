"""이 파일은 .py 테스트 모듈로 스텝 설정 스키마를 검증합니다."""

from rhda.core.config_validation import apply_config_schema, check_field
from rhda.core.errors import PluginConfigError

STEP_SCHEMA = {
    "required": ["file"],
    "properties": {
        "file": {"type": "string", "min_length": 1, "message": "Manifest file location cannot be empty"},
        "consentTelemetry": {"type": "boolean", "default": False},
    },
}


def test_apply_config_schema_defaults() -> None:
    schema = {
        "properties": {
            "path": {"type": "string", "default": "requirements.txt"},
        }
    }
    result = apply_config_schema(schema, {})
    assert result["path"] == "requirements.txt"


def test_apply_config_schema_type_error() -> None:
    schema = {"properties": {"port": {"type": "integer"}}}
    try:
        apply_config_schema(schema, {"port": "not-int"})
    except PluginConfigError as exc:
        assert "port" in str(exc)
    else:
        raise AssertionError("PluginConfigError not raised")


def test_apply_config_schema_min_validation() -> None:
    schema = {"properties": {"timeout": {"type": "integer", "min": 1}}}
    try:
        apply_config_schema(schema, {"timeout": 0})
    except PluginConfigError as exc:
        assert "timeout" in str(exc)
    else:
        raise AssertionError("PluginConfigError not raised")


def test_consent_telemetry_defaults_to_false() -> None:
    result = apply_config_schema(STEP_SCHEMA, {"file": "pom.xml"})
    assert result == {"file": "pom.xml", "consentTelemetry": False}


def test_empty_file_uses_step_message() -> None:
    for value in ("", "   "):
        try:
            apply_config_schema(STEP_SCHEMA, {"file": value})
        except PluginConfigError as exc:
            assert str(exc) == "Manifest file location cannot be empty"
        else:
            raise AssertionError("PluginConfigError not raised")


def test_missing_file_uses_step_message() -> None:
    try:
        apply_config_schema(STEP_SCHEMA, {})
    except PluginConfigError as exc:
        assert str(exc) == "Manifest file location cannot be empty"
    else:
        raise AssertionError("PluginConfigError not raised")


def test_check_field() -> None:
    assert check_field(STEP_SCHEMA, "file", "") == "Manifest file location cannot be empty"
    assert check_field(STEP_SCHEMA, "file", None) == "Manifest file location cannot be empty"
    assert check_field(STEP_SCHEMA, "file", "package.json") is None
    assert check_field(STEP_SCHEMA, "unknown", "") is None
