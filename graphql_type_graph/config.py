"""Configuration management for gql-graph."""

from dataclasses import asdict, dataclass, field, fields
from typing import Optional

import yaml

from . import utils


@dataclass
class DisplayOptions:
    """Options that shape the produced graph."""

    sort_by_alphabet: bool = False
    skip_relay: bool = True
    skip_deprecated: bool = True
    root_type: Optional[str] = None
    hide_root: bool = False
    relay_root_fields: list[str] = field(default_factory=lambda: ["node", "nodes"])

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DisplayOptions":
        """Build options from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def merge(self, **overrides) -> "DisplayOptions":
        """Return a copy with every non-None override applied."""
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return DisplayOptions(**data)


@dataclass
class Config:
    """Configuration for gql-graph."""

    default_url: Optional[str] = None
    schema_cache_dir: str = "~/.gql-graph/schemas"
    source_link_template: Optional[str] = None
    display: DisplayOptions = field(default_factory=DisplayOptions)

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.gql-graph/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Merge with defaults
    return Config(
        default_url=data.get("default_url"),
        schema_cache_dir=data.get("schema_cache_dir", "~/.gql-graph/schemas"),
        source_link_template=data.get("source_link_template"),
        display=DisplayOptions.from_dict(data.get("display")),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://api.example.com/graphql",
        "schema_cache_dir": "~/.gql-graph/schemas",
        "source_link_template": "vscode://file/{filepath}:{line}:{column}",
        "display": {
            "sort_by_alphabet": False,
            "skip_relay": True,
            "skip_deprecated": True,
            "root_type": None,
            "hide_root": False,
            "relay_root_fields": ["node", "nodes"],
        },
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
