"""expressgen configuration.

Two pydantic v2 models live here:

* :class:`FeatureSelection` -- the immutable, validated record of what the
  user asked to generate (language, middlewares, persistence, tooling).
* :class:`Config` -- run settings that are not part of the generated output
  (where to write, whether to run the installer, how to treat a broken
  ``package.json``).  Usually built once by the CLI via :meth:`Config.from_env`.
"""

from __future__ import annotations

import os
import shlex
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from expressgen.errors import ValidationError

CURRENT_DIR = "."


class Language(str, Enum):
    """Source language of the generated project."""

    TYPESCRIPT = "TypeScript"
    JAVASCRIPT = "JavaScript"


# ---------------------------------------------------------------------------
# FeatureSelection
# ---------------------------------------------------------------------------


class FeatureSelection(BaseModel):
    """Everything the composer needs to know about the project to scaffold.

    ``ts_config`` is only meaningful for TypeScript projects and is cleared
    for JavaScript ones, so ``ts_config`` always implies TypeScript.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    project_name: str = Field(default=CURRENT_DIR, description="Target folder, '.' for the current one")
    language: Language = Field(default=Language.TYPESCRIPT)
    env_file: bool = Field(default=True, description="Generate a .env file and load it with dotenv")
    enable_cors: bool = Field(default=True)
    database: bool = Field(default=False, description="Wire a mongoose connection helper")
    gitignore: bool = Field(default=True)
    nodemon: bool = Field(default=False)
    dockerfile: bool = Field(default=False)
    ts_config: bool = Field(default=False, description="Generate tsconfig.json (TypeScript only)")

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        name = data.get("project_name", CURRENT_DIR)
        if name is None or not str(name).strip():
            raise ValueError("project name must not be empty")
        data["project_name"] = str(name).strip()
        if Language(data.get("language", Language.TYPESCRIPT)) is Language.JAVASCRIPT:
            data["ts_config"] = False
        return data

    @classmethod
    def from_answers(cls, answers: dict[str, Any]) -> "FeatureSelection":
        """Validate a raw mapping of prompt answers.

        Raises:
            ValidationError: If the answers do not describe a usable project
                (in practice: an empty project name).
        """
        try:
            return cls.model_validate(answers)
        except PydanticValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            raise ValidationError(messages) from exc

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TYPESCRIPT

    @property
    def ext(self) -> str:
        """File extension for generated sources (``ts`` or ``js``)."""
        return "ts" if self.is_typescript else "js"

    @property
    def uses_current_dir(self) -> bool:
        return self.project_name == CURRENT_DIR


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


ManifestParsePolicy = Literal["replace", "keep"]


class Config(BaseModel):
    """Run settings for one scaffolding invocation."""

    output_dir: Path = Field(default=Path(CURRENT_DIR))
    install: bool = Field(default=True, description="Run the package installer after writing files")
    install_command: list[str] = Field(default_factory=lambda: ["npm", "install"])
    manifest_parse_policy: ManifestParsePolicy = Field(
        default="replace",
        description=(
            "'replace' overwrites a malformed package.json with a fresh one; "
            "'keep' leaves it untouched and skips the manifest write"
        ),
    )
    package_name: str = Field(default="expressgen")
    version_url: str = Field(default="https://pypi.org/pypi/{package}/json")
    version_timeout: float = Field(default=5.0, gt=0)

    def project_dir(self, selection: FeatureSelection) -> Path:
        """Resolve the directory every artifact of *selection* is written under."""
        base = Path(self.output_dir)
        if selection.uses_current_dir:
            return base.resolve()
        return (base / selection.project_name).resolve()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            EXPRESSGEN_OUTPUT_DIR, EXPRESSGEN_INSTALL, EXPRESSGEN_INSTALL_COMMAND,
            EXPRESSGEN_MANIFEST_POLICY, EXPRESSGEN_VERSION_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESSGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXPRESSGEN_OUTPUT_DIR"])
        if os.environ.get("EXPRESSGEN_INSTALL"):
            kwargs["install"] = os.environ["EXPRESSGEN_INSTALL"].strip().lower() in ("1", "true", "yes", "on")
        if os.environ.get("EXPRESSGEN_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["EXPRESSGEN_INSTALL_COMMAND"])
        if os.environ.get("EXPRESSGEN_MANIFEST_POLICY"):
            kwargs["manifest_parse_policy"] = os.environ["EXPRESSGEN_MANIFEST_POLICY"].strip().lower()
        if os.environ.get("EXPRESSGEN_VERSION_TIMEOUT"):
            kwargs["version_timeout"] = float(os.environ["EXPRESSGEN_VERSION_TIMEOUT"])
        return cls(**kwargs)
