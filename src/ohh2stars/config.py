from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_EXTENSIONS = [".ohh", ".json", ".txt"]


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_dir: Optional[str] = None
    output_suffix: str = ".ps.txt"
    extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    poll_interval: float = Field(1.0, gt=0)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with every non-None override applied (command-line flags win over the file)."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return settings_from_dict(data)

    def output_path_for(self, source: Path) -> Path:
        out_dir = Path(self.output_dir) if self.output_dir else source.parent
        return out_dir / (source.stem + self.output_suffix)

    def wants(self, path: Union[str, Path]) -> bool:
        name = str(path)
        if name.endswith(self.output_suffix):
            return False
        return Path(name).suffix.lower() in {e.lower() for e in self.extensions}


def settings_from_dict(data: Any) -> Settings:
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}") from e


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    if config_path is None:
        return Settings()

    config_path = Path(config_path)
    try:
        raw = config_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config {config_path}: {e}") from e

    try:
        return Settings.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {config_path}: {e}") from e
