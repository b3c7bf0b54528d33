"""
Run configuration using Pydantic.

Values come from an optional YAML file and are overridden by command
line flags. Every problem is collected before reporting, so a user with
three missing options sees all three at once.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReclassConfig(BaseModel):
    """Inputs needed to locate and merge one run's classifications."""
    study_folder: Path = Field(..., description="Path to the study folder")
    subject: str = Field(..., description="Subject ID")
    fmri_name: str = Field(..., description="fMRI name (e.g. 'rfMRI_REST1_LR')")
    high_pass: str = Field(..., description="High-pass filter used in ICA+FIX")
    num_components: Optional[int] = Field(
        None, ge=0, description="Component count; read from melodic_oIC when omitted"
    )
    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[Path] = Field(None, description="Append logs to this file")
    hcp_pipeline_dir: Optional[Path] = Field(
        None, description="HCPPIPEDIR, used only to report the pipeline version"
    )

    @field_validator('subject', 'fmri_name', 'high_pass', mode='before')
    @classmethod
    def validate_identifier(cls, v):
        """Identifiers end up in paths; they must be non-empty."""
        if v is None:
            return v
        v = str(v).strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(LOG_LEVELS)}.")
        return v


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML mapping of config values; an empty file is an empty mapping."""
    path = Path(path)
    if not path.exists():
        raise ConfigError([f"Config file not found: {path}"])

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError([f"Config file {path} must contain a mapping, got {type(data).__name__}"])
    return data


def build_config(
    config_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> ReclassConfig:
    """
    Merge file values, environment and explicit overrides into a ReclassConfig.

    Overrides that are None are ignored so unset CLI flags do not mask
    values from the file.

    Raises:
        ConfigError: Listing every invalid or missing value
    """
    values: Dict[str, Any] = {}
    if config_file is not None:
        values.update(load_config_file(config_file))

    hcp_dir = os.getenv("HCPPIPEDIR")
    if hcp_dir and 'hcp_pipeline_dir' not in values:
        values['hcp_pipeline_dir'] = hcp_dir

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ReclassConfig(**values)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            name = ".".join(str(part) for part in err["loc"]) or "config"
            if err["type"] == "missing":
                problems.append(f"{name} required")
            else:
                problems.append(f"{name}: {err['msg']}")
        raise ConfigError(problems) from e
