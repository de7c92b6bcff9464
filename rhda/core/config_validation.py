"""이 파일은 .py 스텝 설정 스키마 검증 모듈입니다."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .errors import PluginConfigError


_TYPE_MAP = {
    # JSON 스키마 타입을 파이썬 타입으로 매핑한다.
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "array": list,
}


def apply_config_schema(schema: Optional[Dict[str, Any]], config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    # 스키마가 없으면 전달된 설정을 그대로 반환한다.
    if not schema:
        return config or {}
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise PluginConfigError("Step config must be an object")

    props = schema.get("properties", {})
    required = schema.get("required", [])
    errors: List[str] = []
    result = dict(config)

    for key in required:
        # 필수 필드가 없으면 default를 주입하거나 오류로 수집한다.
        if key not in result:
            default = props.get(key, {}).get("default")
            if default is not None:
                result[key] = default
            else:
                errors.append(props.get(key, {}).get("message") or f"Missing required config: {key}")

    for key, spec in props.items():
        if key not in result and "default" in spec:
            result[key] = spec["default"]

    for key, value in result.items():
        spec = props.get(key)
        if spec:
            errors.extend(field_errors(key, value, spec))

    if errors:
        # 누적된 오류를 하나의 예외로 전달한다.
        raise PluginConfigError("; ".join(errors))
    return result


def check_field(schema: Optional[Dict[str, Any]], key: str, value: Any) -> Optional[str]:
    """설정 화면의 단일 필드 검증용으로 첫 번째 오류 메시지만 돌려줍니다."""
    spec = ((schema or {}).get("properties") or {}).get(key)
    if not spec:
        return None
    if value is None:
        if key in (schema or {}).get("required", []):
            return spec.get("message") or f"Missing required config: {key}"
        return None
    errors = field_errors(key, value, spec)
    return errors[0] if errors else None


def field_errors(key: str, value: Any, spec: Dict[str, Any]) -> List[str]:
    # 항목 하나에 대해 타입/범위/패턴을 검증한다.
    # spec.message가 있으면 값 제약 위반 시 그 문구를 그대로 쓴다.
    errors: List[str] = []
    message = spec.get("message")
    expected = spec.get("type")
    if expected:
        expected_type = _TYPE_MAP.get(expected)
        if expected_type is None:
            errors.append(f"Unsupported type in schema: {expected}")
        # bool은 int의 하위 타입이므로 integer 검증에서 예외 처리한다.
        elif expected == "integer" and isinstance(value, bool):
            errors.append(f"Config '{key}' must be integer")
        elif not isinstance(value, expected_type):
            errors.append(f"Config '{key}' must be {expected}")
            return errors
    if "enum" in spec and value not in spec["enum"]:
        errors.append(message or f"Config '{key}' must be one of {spec['enum']}")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if "min" in spec and value < spec["min"]:
            errors.append(message or f"Config '{key}' must be >= {spec['min']}")
        if "max" in spec and value > spec["max"]:
            errors.append(message or f"Config '{key}' must be <= {spec['max']}")
    if isinstance(value, str):
        if "min_length" in spec and len(value.strip()) < spec["min_length"]:
            errors.append(message or f"Config '{key}' length must be >= {spec['min_length']}")
        if "max_length" in spec and len(value) > spec["max_length"]:
            errors.append(message or f"Config '{key}' length must be <= {spec['max_length']}")
        if "pattern" in spec and not re.compile(spec["pattern"]).search(value):
            errors.append(message or f"Config '{key}' does not match pattern")
    return errors
