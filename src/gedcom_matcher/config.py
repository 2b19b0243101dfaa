import os
import yaml
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_matcher.yml"

# Used when the checkout's config/ is not there (installed console script).
DEFAULT_CONFIG = {
    "debug": False,
    "paths": {"logs_dir": "logs"},
    "logging": {"level": "INFO", "file": "gedcom_matcher.log", "rotate": False},
    "output": {"wrap_width": 120, "encoding": "utf-8"},
    "matching": {"extension_id_tag": "_APID", "anchor_tag": "_ROOT", "quality_tag": "QUAY"},
}

class GMConfig:
    def __init__(self, data, base_dir=None):
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.output = data.get("output", {})
        self.matching = data.get("matching", {})
        self.debug = data.get("debug", False)
        # relative paths (logs) resolve against this
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

    @property
    def wrap_width(self) -> int:
        return int(self.output.get("wrap_width", 120))

    @property
    def output_encoding(self) -> str:
        return str(self.output.get("encoding", "utf-8"))

    def tag(self, name: str, default: str) -> str:
        return str(self.matching.get(name, default))

def config_path() -> Path:
    override = os.environ.get("GEDCOM_MATCHER_CONFIG")
    return Path(override) if override else CONFIG_PATH

def load_config() -> 'GMConfig':
    path = config_path()
    if not path.exists():
        if path == CONFIG_PATH:
            return GMConfig(DEFAULT_CONFIG)
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if path == CONFIG_PATH:
        return GMConfig(data, base_dir=CONFIG_PATH.parents[1])
    return GMConfig(data)

_config_cache = None

def get_config() -> 'GMConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
