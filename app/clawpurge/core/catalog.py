"""Identifier catalog for the product and its legacy names.

The catalog is the complete, immutable list of names, bundle identifiers,
launchd labels, package names and patterns that detection and removal
walk. Defaults cover OpenClaw (current name), ClawdBot and MoltBot
(legacy names). Individual fields may be overridden from the
``[catalog]`` table of the configuration file.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

NameList = tuple[str, ...]


class Catalog(BaseModel):
    """Immutable category -> identifiers mapping.

    Attributes:
        app_names: Application bundle names (without ``.app``).
        bundle_ids: Reverse-DNS bundle identifiers.
        launchd_labels: LaunchAgent / LaunchDaemon labels.
        launchagent_plists: LaunchAgent descriptor filenames.
        node_packages: npm / pnpm / bun global package names.
        brew_formulas: Homebrew formula and cask names.
        process_names: Exact process names.
        config_dirs: Configuration directories under a user's home.
        profile_prefixes: Prefixes of profile-suffixed config directories.
        name_patterns: Substrings matched by glob and pattern passes.
        launchd_patterns: Substrings matched against launchd labels and plists.
        kill_patterns: Substrings matched against full process command lines.
        cli_name: Name of the product's own command line tool.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    app_names: Annotated[NameList, Field(description="Application names")] = (
        "OpenClaw",
        "ClawdBot",
        "MoltBot",
    )
    bundle_ids: Annotated[NameList, Field(description="Bundle identifiers")] = (
        "com.openclaw.app",
        "com.openclaw.gateway",
        "com.clawdbot.app",
        "com.clawdbot.gateway",
        "bot.molt.app",
        "bot.molt.gateway",
        "ai.openclaw.app",
        "ai.openclaw.gateway",
    )
    launchd_labels: Annotated[NameList, Field(description="launchd labels")] = (
        "com.openclaw.gateway",
        "com.openclaw.app",
        "com.clawdbot.gateway",
        "com.clawdbot.app",
        "bot.molt.gateway",
        "bot.molt.app",
    )
    launchagent_plists: Annotated[NameList, Field(description="LaunchAgent filenames")] = (
        "com.openclaw.gateway.plist",
        "com.openclaw.app.plist",
        "com.clawdbot.gateway.plist",
        "com.clawdbot.app.plist",
        "bot.molt.gateway.plist",
        "bot.molt.app.plist",
    )
    node_packages: Annotated[NameList, Field(description="Global node packages")] = (
        "openclaw",
        "moltbot",
        "clawdbot",
    )
    brew_formulas: Annotated[NameList, Field(description="Homebrew formulas/casks")] = (
        "openclaw",
        "openclaw-cli",
        "clawdbot",
        "clawdbot-cli",
        "moltbot",
        "moltbot-cli",
    )
    process_names: Annotated[NameList, Field(description="Exact process names")] = (
        "openclaw",
        "OpenClaw",
        "clawdbot",
        "ClawdBot",
        "moltbot",
        "MoltBot",
        "openclaw-gateway",
        "clawdbot-gateway",
        "moltbot-gateway",
    )
    config_dirs: Annotated[NameList, Field(description="Home config directories")] = (
        ".openclaw",
        ".clawdbot",
        ".moltbot",
    )
    profile_prefixes: Annotated[NameList, Field(description="Profile dir prefixes")] = (
        ".openclaw-",
        ".clawdbot-",
        ".moltbot-",
    )
    name_patterns: Annotated[NameList, Field(description="Glob substrings")] = (
        "openclaw",
        "clawdbot",
        "moltbot",
    )
    launchd_patterns: Annotated[NameList, Field(description="launchd substrings")] = (
        "openclaw",
        "clawdbot",
        "moltbot",
        "bot.molt",
    )
    kill_patterns: Annotated[NameList, Field(description="Command line substrings")] = (
        "openclaw",
        "clawdbot",
        "moltbot",
        "openclaw-gateway",
        "clawdbot-gateway",
        "moltbot-gateway",
    )
    cli_name: Annotated[str, Field(min_length=1, description="Product CLI name")] = "openclaw"

    @field_validator("*", mode="after")
    @classmethod
    def reject_blank_entries(cls, v: object, info: ValidationInfo) -> object:
        """Reject empty strings inside identifier lists.

        An empty pattern would glob every entry of a directory.
        """
        if isinstance(v, tuple) and any(not str(item).strip() for item in v):
            msg = f"{info.field_name}: entries must be non-empty strings"
            raise ValueError(msg)
        return v

    @property
    def product_label(self) -> str:
        """Human-readable product name covering all historical names."""
        return "/".join(self.app_names)
