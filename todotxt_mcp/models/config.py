"""Configuration models for todotxt MCP."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from todotxt_mcp.exceptions import ConfigurationError


class SourceConfig(BaseModel):
    """One GitHub project to sync issues from."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Name used to select this source")
    organization: str = Field(..., min_length=1, description="GitHub organization login")
    project_number: int = Field(..., ge=1, description="Number of the organization project (v2)")
    status_filters: list[str] = Field(
        default_factory=list,
        description="Project statuses to sync; empty syncs every status",
    )


class GitHubConfig(BaseModel):
    """GitHub section of config.toml."""

    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")
    projects: list[SourceConfig] = Field(default_factory=list)


class AppConfig(BaseModel):
    """Parsed config.toml."""

    github: GitHubConfig = Field(default_factory=GitHubConfig)

    def get_source(self, name: str) -> SourceConfig:
        for source in self.github.projects:
            if source.name == name:
                return source
        raise ConfigurationError(f"GitHub project '{name}' not found in config")

    def all_sources(self) -> list[SourceConfig]:
        return list(self.github.projects)
