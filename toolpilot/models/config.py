"""
Configuration models for Toolpilot.

Supports configuration via YAML file, environment variables, or programmatic setup.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseModel):
    """LLM provider configuration.

    Any provider supported by LiteLLM works; planning defaults to a
    deterministic temperature so that the same request yields the same plan.
    """

    provider: str = Field(
        default="anthropic",
        description="LLM provider (anthropic, openai, google, azure, ollama, groq, etc.)"
    )
    model: str = Field(
        default="claude-sonnet-4-5-20250929",
        description="Model name for the provider"
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (0.0-2.0)"
    )
    api_key: str | None = Field(
        default=None,
        description="API key (falls back to environment variable)"
    )
    api_base: str | None = Field(
        default=None,
        description="Custom API base URL (for Azure, Ollama, etc.)"
    )
    timeout: int = Field(
        default=120,
        ge=1,
        description="Request timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum retries on rate-limit responses"
    )

    def get_model_string(self) -> str:
        """Get the full model string for LiteLLM."""
        if "/" in self.model and self.model.split("/", 1)[0] == self.provider:
            return self.model
        return f"{self.provider}/{self.model}"

    def get_api_key(self) -> str | None:
        """Get the API key from config or the provider's environment variable."""
        if self.api_key:
            return self.api_key
        env_key = SUPPORTED_PROVIDERS.get(self.provider, {}).get("env_key")
        return os.environ.get(env_key) if env_key else None

    def is_configured(self) -> bool:
        """Check whether the provider has the credentials it needs."""
        if self.provider in ("ollama", "bedrock"):
            return True
        return bool(self.get_api_key())


class TransportConfig(BaseModel):
    """MCP execution transport configuration."""

    command: str = Field(
        default="npx",
        description="Command that launches the MCP server over stdio"
    )
    args: list[str] = Field(
        default_factory=lambda: ["@antonytm/mcp-sitecore-server@latest"],
        description="Arguments passed to the MCP server command"
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment variables for the MCP server"
    )
    inherit_env: bool = Field(
        default=True,
        description="Pass the current process environment to the MCP server"
    )
    cwd: str | None = Field(
        default=None,
        description="Working directory for the MCP server process"
    )
    startup_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for the MCP session to initialize"
    )
    client_name: str = Field(default="toolpilot-mcp-client")
    client_version: str = Field(default="1.0.0")
    probe_url: str | None = Field(
        default=None,
        description="Endpoint used by the connectivity probe"
    )
    probe_api_key: str | None = Field(
        default=None,
        description="API key sent with the connectivity probe"
    )

    def build_env(self) -> dict[str, str]:
        """Build the environment for the MCP server process."""
        env: dict[str, str] = dict(os.environ) if self.inherit_env else {}
        env.setdefault("TRANSPORT", "stdio")
        env.update(self.env)
        return env


class PlanningConfig(BaseModel):
    """Planning and prompt budget configuration."""

    history_limit: int = Field(
        default=10,
        ge=0,
        description="Most recent conversation messages forwarded to the model"
    )
    plan_max_tokens: int = Field(
        default=4096,
        ge=1,
        description="Token ceiling for the planning call"
    )
    summary_max_tokens: int = Field(
        default=512,
        ge=1,
        description="Token ceiling for the summary call"
    )
    max_tools: int = Field(
        default=20,
        ge=1,
        description="Maximum tools described in the planning prompt"
    )
    max_description_chars: int = Field(
        default=2000,
        ge=1,
        description="Character ceiling for the rendered tool description"
    )
    fallback_tool: str = Field(
        default="content_items.list",
        description="Listing tool used when the model plan cannot be parsed"
    )
    fallback_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size of the fallback listing action"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level"
    )
    file: str | None = Field(
        default=None,
        description="Log file path (None = console only)"
    )
    json_format: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )


class ToolpilotConfig(BaseSettings):
    """
    Main Toolpilot configuration.

    Configuration can be loaded from:
    1. YAML file (toolpilot.yaml or config.yaml)
    2. Environment variables (TOOLPILOT_* prefix)
    3. Programmatic setup
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLPILOT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    llm: LLMConfig = Field(default_factory=LLMConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    planning: PlanningConfig = Field(default_factory=PlanningConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "ToolpilotConfig":
        """
        Load configuration from file and environment.

        Priority (highest to lowest):
        1. Environment variables
        2. Specified config file
        3. Default config files (toolpilot.yaml, config.yaml)
        4. Default values
        """
        config_data: dict = {}

        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            config_data = cls._load_yaml(config_file)
        else:
            for filename in ["toolpilot.yaml", "config.yaml", "toolpilot.yml", "config.yml"]:
                config_file = Path(filename)
                if config_file.exists():
                    config_data = cls._load_yaml(config_file)
                    break

        return cls(**config_data)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        """Load YAML configuration file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data else {}

    def save(self, path: str | Path) -> None:
        """Save configuration to YAML file, leaving secrets out."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude_none=True)
        data["llm"].pop("api_key", None)
        data["transport"].pop("probe_api_key", None)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                default_flow_style=False,
                sort_keys=False,
            )


# Known LiteLLM providers and the environment variable holding their key
SUPPORTED_PROVIDERS = {
    "anthropic": {
        "name": "Anthropic",
        "models": ["claude-sonnet-4-5-20250929", "claude-3-5-sonnet-20241022", "claude-3-haiku-20240307"],
        "env_key": "ANTHROPIC_API_KEY",
    },
    "openai": {
        "name": "OpenAI",
        "models": ["gpt-4o", "gpt-4o-mini", "gpt-4-turbo"],
        "env_key": "OPENAI_API_KEY",
    },
    "google": {
        "name": "Google AI",
        "models": ["gemini-1.5-pro", "gemini-1.5-flash"],
        "env_key": "GOOGLE_API_KEY",
    },
    "azure": {
        "name": "Azure OpenAI",
        "models": ["gpt-4o", "gpt-4"],
        "env_key": "AZURE_API_KEY",
    },
    "ollama": {
        "name": "Ollama (Local)",
        "models": ["llama3.1", "mistral", "qwen2.5"],
        "env_key": None,
    },
    "groq": {
        "name": "Groq",
        "models": ["llama-3.1-70b-versatile", "llama-3.1-8b-instant"],
        "env_key": "GROQ_API_KEY",
    },
    "mistral": {
        "name": "Mistral AI",
        "models": ["mistral-large-latest", "mistral-small-latest"],
        "env_key": "MISTRAL_API_KEY",
    },
    "bedrock": {
        "name": "AWS Bedrock",
        "models": ["anthropic.claude-3-sonnet", "anthropic.claude-3-haiku"],
        "env_key": None,  # Uses AWS credentials
    },
}
