"""Application configuration: settings schema and layered loader"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar, Optional

import yaml
from pydantic import BaseModel, Field

from semdoc.core.models import ParseOptions


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    env_prefix: ClassVar[str] = "SEMDOC_"

    app_name:           str  = "semdoc"
    parse_code_as_json: bool = Field(default=False,      description="Try JSON on code blocks without a pre-parsed value")
    parser_config:      str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:         str  = Field(default="dist",     description="Directory for parsed JSON files")
    indent:             int  = Field(default=2, ge=0,    description="JSON indent; 0 writes compact output")
    log_level:          str  = Field(default="WARNING",  pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @classmethod
    def env_values(cls, environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Non-empty <env_prefix><FIELD> variables, keyed by field name."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            value = environ.get(f"{cls.env_prefix}{name.upper()}")
            if value:
                values[name] = value
        return values

    def parse_options(self) -> ParseOptions:
        return ParseOptions(parse_code_as_json=self.parse_code_as_json)


def read_config_file(path: Path) -> dict[str, Any]:
    """Mapping stored in a YAML config file; a missing or empty file gives {}."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data


def load_config(overrides: dict[str, Any] = None, config_file: Path = Path(CONFIG_FILE)) -> Settings:
    """Layer config_file, then env vars, then non-None CLI overrides into Settings."""
    data = read_config_file(config_file)
    data.update(Settings.env_values())
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
