"""Configuration models for the screenshot test runner."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from visual_ci.network import is_network_reachable


class BuildConfig(BaseModel):
    command: Optional[str] = None
    cwd: Optional[str] = None


class GitHubConfig(BaseModel):
    api_url: str = "https://api.github.com"
    repository: str = ""  # "owner/name"
    commit_sha: str = ""
    token: Optional[str] = None
    status_context: str = "visual-ci/screenshots"
    timeout_seconds: float = 10.0

    @field_validator("token", mode="before")
    @classmethod
    def resolve_env_token(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and v.startswith("env:"):
            env_var = v[4:]
            resolved = os.environ.get(env_var)
            if resolved is None:
                raise ValueError(f"Environment variable '{env_var}' not set")
            return resolved
        return v

    def is_enabled(self) -> bool:
        return bool(self.token and self.repository and self.commit_sha)


class RunnerConfig(BaseModel):
    # Diff bases
    diff_base: str = "origin/master"
    stable_branch: str = "origin/master"

    # Connectivity
    offline: bool = False
    connectivity_check_host: str = "api.github.com"
    connectivity_check_port: int = 443
    connectivity_timeout_seconds: float = 3.0

    # Collaborators
    build: BuildConfig = Field(default_factory=BuildConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    report_controller: str = ""  # "package.module:factory"
    image_differ: str = ""  # "package.module:factory"

    _online: Optional[bool] = PrivateAttr(default=None)

    def is_online(self) -> bool:
        """Whether the run is network-connected. The probe runs at most once per config."""
        if self.offline:
            return False
        if self._online is None:
            self._online = is_network_reachable(
                self.connectivity_check_host,
                self.connectivity_check_port,
                self.connectivity_timeout_seconds,
            )
        return self._online

    @classmethod
    def load(cls, path: str | Path) -> "RunnerConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
