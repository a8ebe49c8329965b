"""Pydantic models for Trellis setup data."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_EDITOR = "vscode"
DEFAULT_ENV_NAME = "sampledev"


class InvocationOptions(BaseModel):
    """Requested setup mode, fixed for the lifetime of the process.

    Attributes:
        app: Sample repository URL; enables the sample-app branch.
        quickstart: Enables the quickstart branch.

    Example:
        >>> InvocationOptions(app=" https://github.com/x/y.git ").app
        'https://github.com/x/y.git'
        >>> InvocationOptions(app="  ").app is None
        True
    """

    model_config = ConfigDict(frozen=True)

    app: str | None = None
    quickstart: bool = False

    @field_validator("app", mode="before")
    @classmethod
    def normalize_app(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value


class LocalEnvInfo(BaseModel):
    """Machine-local project settings persisted under ``trellis/.config``.

    Serialized with camelCase keys.

    Example:
        >>> info = LocalEnvInfo(project_path="/app")
        >>> info.model_dump(by_alias=True)
        {'projectPath': '/app', 'defaultEditor': 'vscode', 'envName': 'sampledev'}
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_path: str
    default_editor: str = DEFAULT_EDITOR
    env_name: str = DEFAULT_ENV_NAME


class InputParams(BaseModel):
    """Parameters forwarded to the rest of the init flow."""

    env_name: str | None = None


FeatureFlagValues = dict[str, dict[str, bool | int | str]]


class FeatureFlagsFile(BaseModel):
    """On-disk feature-flag document (``cli.json``).

    Attributes:
        features: Mapping of section name to flag name to value.
    """

    model_config = ConfigDict(extra="allow")

    features: FeatureFlagValues = Field(default_factory=dict)

    @field_validator("features", mode="before")
    @classmethod
    def normalize_features(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict) and all(isinstance(f, dict) for f in value.values()):
            return {
                str(section).strip().lower(): {
                    str(name).strip().lower(): flag for name, flag in flags.items()
                }
                for section, flags in value.items()
            }
        return value
