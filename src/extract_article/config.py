"""Configuration loader for extract_article."""

from dataclasses import dataclass, field

from common.config import ConfigSingleton, find_config_path, load_yaml

CONFIG_ENV_VAR = "EXTRACT_CONFIG"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_IFRAME_HOSTS = [
    "www.youtube.com",
    "youtube.com",
    "www.youtube-nocookie.com",
    "player.vimeo.com",
]

CONTENT_ENGINES = ("heuristic", "readability")


@dataclass
class FetchConfig:
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.9"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"fetch.timeout must be positive, got {self.timeout}")


@dataclass
class MetadataConfig:
    max_title_chars: int = 200
    max_description_chars: int = 500
    default_title: str = "Untitled Article"

    def __post_init__(self) -> None:
        if self.max_title_chars <= 0 or self.max_description_chars <= 0:
            raise ValueError("metadata limits must be positive")


@dataclass
class ContentConfig:
    engine: str = "heuristic"  # "heuristic" or "readability"
    min_text_length: int = 250
    selector_min_chars: int = 100
    paragraph_min_chars: int = 20
    max_plain_text_chars: int = 5000

    def __post_init__(self) -> None:
        if self.engine not in CONTENT_ENGINES:
            raise ValueError(
                f"Invalid content engine: {self.engine}. Must be one of {list(CONTENT_ENGINES)}"
            )
        if self.max_plain_text_chars <= 0:
            raise ValueError("content.max_plain_text_chars must be positive")


@dataclass
class SanitizeConfig:
    allowed_iframe_hosts: list[str] = field(default_factory=lambda: list(DEFAULT_IFRAME_HOSTS))


@dataclass
class ExtractConfig:
    fetch: FetchConfig = field(default_factory=FetchConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    sanitize: SanitizeConfig = field(default_factory=SanitizeConfig)


def load_config(config_name: str | None = None) -> ExtractConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path.
                    If None, uses EXTRACT_CONFIG env var or "default".

    Returns:
        Loaded ExtractConfig object
    """
    config_path = find_config_path(config_name, env_var=CONFIG_ENV_VAR)
    return _parse_config(load_yaml(config_path))


def _parse_config(data: dict) -> ExtractConfig:
    """Parse config dictionary into ExtractConfig object."""
    fetch_data = data.get("fetch") or {}
    metadata_data = data.get("metadata") or {}
    content_data = data.get("content") or {}
    sanitize_data = data.get("sanitize") or {}

    fetch = FetchConfig(
        timeout=float(fetch_data.get("timeout", 10.0)),
        user_agent=fetch_data.get("user_agent", DEFAULT_USER_AGENT),
        accept_language=fetch_data.get("accept_language", "en-US,en;q=0.9"),
    )

    metadata = MetadataConfig(
        max_title_chars=metadata_data.get("max_title_chars", 200),
        max_description_chars=metadata_data.get("max_description_chars", 500),
        default_title=metadata_data.get("default_title", "Untitled Article"),
    )

    content = ContentConfig(
        engine=content_data.get("engine", "heuristic"),
        min_text_length=content_data.get("min_text_length", 250),
        selector_min_chars=content_data.get("selector_min_chars", 100),
        paragraph_min_chars=content_data.get("paragraph_min_chars", 20),
        max_plain_text_chars=content_data.get("max_plain_text_chars", 5000),
    )

    sanitize = SanitizeConfig(
        allowed_iframe_hosts=sanitize_data.get("allowed_iframe_hosts", list(DEFAULT_IFRAME_HOSTS)),
    )

    return ExtractConfig(fetch=fetch, metadata=metadata, content=content, sanitize=sanitize)


# Global config instance (loaded on first access)
_manager: ConfigSingleton[ExtractConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
