"""이 파일은 .py 스텝 로더 모듈로 메타데이터 로딩과 동적 임포트를 수행합니다."""

import importlib.util
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from .plugin_base import BaseStep
from .types import StepContext

STEP_TYPES = {"pipeline", "freestyle"}


@dataclass(frozen=True)
class PluginMeta:
    # plugin.yml에서 읽은 스텝 메타 정보를 구조화한다.
    plugin_id: str
    name: str
    version: str
    plugin_type: str
    function_name: Optional[str]
    display_name: str
    description: Optional[str]
    config_schema: Optional[dict]
    entry_point: str
    class_name: str
    plugin_dir: Path

    @property
    def module_path(self) -> Path:
        return self.plugin_dir / self.entry_point


class PluginLoader:
    def __init__(self, plugins_dir: Path):
        self.plugins_dir = Path(plugins_dir)

    def discover(self) -> List[PluginMeta]:
        # plugins_dir 하위의 모든 plugin.yml을 탐색한다.
        metas: List[PluginMeta] = []
        for plugin_file in sorted(self.plugins_dir.rglob("plugin.yml")):
            metas.append(self._load_meta(plugin_file))
        return metas

    def find(self, plugin_id: str) -> PluginMeta:
        for meta in self.discover():
            if meta.plugin_id == plugin_id or meta.function_name == plugin_id:
                return meta
        raise KeyError(f"Step not found: {plugin_id}")

    def load_plugin(self, meta: PluginMeta, context: StepContext) -> BaseStep:
        # entry_point를 동적으로 import하여 스텝 인스턴스를 만든다.
        module = self._import_module(meta)
        step_class = getattr(module, meta.class_name, None)
        if step_class is None:
            raise ImportError(f"Class {meta.class_name} not found in {meta.module_path}")
        if not issubclass(step_class, BaseStep):
            raise TypeError(f"{meta.class_name} does not extend BaseStep")
        return step_class(context, jobtype=meta.plugin_type)

    def _load_meta(self, plugin_file: Path) -> PluginMeta:
        data = yaml.safe_load(plugin_file.read_text()) or {}
        required = ["id", "name", "version", "type", "entry_point", "class_name"]
        for field in required:
            if field not in data:
                raise ValueError(f"Missing required field {field} in {plugin_file}")
        plugin_type = str(data["type"])
        if plugin_type not in STEP_TYPES:
            raise ValueError(f"Unsupported step type {plugin_type} in {plugin_file}")

        return PluginMeta(
            plugin_id=str(data["id"]),
            name=str(data["name"]),
            version=str(data["version"]),
            plugin_type=plugin_type,
            function_name=data.get("function_name"),
            display_name=str(data.get("display_name") or data["name"]),
            description=data.get("description"),
            config_schema=data.get("config_schema"),
            entry_point=str(data["entry_point"]),
            class_name=str(data["class_name"]),
            plugin_dir=plugin_file.parent,
        )

    def _import_module(self, meta: PluginMeta):
        module_path = meta.module_path
        if not module_path.exists():
            raise FileNotFoundError(f"Entry point not found: {module_path}")

        # importlib으로 스텝 모듈을 로드한다.
        spec = importlib.util.spec_from_file_location(meta.plugin_id, module_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {module_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
