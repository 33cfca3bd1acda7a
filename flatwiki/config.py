"""
Flatwiki Configuration Loader

Loads configuration from:
1. <FLATWIKI_CONFIG_DIR>/flatwiki.yaml (if FLATWIKI_CONFIG_DIR set)
   OR config/flatwiki.yaml relative to the working directory
2. .env file next to the yaml - deployment overrides
3. FLATWIKI_* environment variables (win over yaml)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

import yaml
from dotenv import load_dotenv

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "web" / "templates"

# Form bodies up to 10 MiB, aiohttp alone would stop at 1 MiB
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES


@dataclass
class StorageConfig:
    root: str = "./created-pages"
    extension: str = ".html"


@dataclass
class SeedConfig:
    title: str = "TestPage"
    body: str = "This is a sample Page."


@dataclass
class LoggingConfig:
    file: str = ""


@dataclass
class WikiConfig:
    """Main configuration container."""
    site_name: str = "flatwiki"
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    templates_dir: Path = DEFAULT_TEMPLATES_DIR

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "WikiConfig":
        """Load configuration from yaml file and environment variables.

        Resolution order:
        1. FLATWIKI_CONFIG_DIR env var → <dir>/flatwiki.yaml
        2. Explicit config_dir argument → config_dir/flatwiki.yaml
        3. Default: ./config/flatwiki.yaml
        """
        env_dir = os.environ.get("FLATWIKI_CONFIG_DIR")
        if env_dir:
            config_dir = Path(env_dir)
        elif config_dir is None:
            config_dir = Path("config")

        yaml_path = config_dir / "flatwiki.yaml"
        load_dotenv(config_dir / ".env", override=False)

        yaml_config = {}
        if yaml_path.exists():
            with open(yaml_path) as f:
                try:
                    yaml_config = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid config file {yaml_path}: {e}") from e
        if not isinstance(yaml_config, dict):
            raise ValueError(f"Invalid config file {yaml_path}: expected a mapping")

        # A section with every key commented out loads as None
        server_cfg = yaml_config.get("server") or {}
        storage_cfg = yaml_config.get("storage") or {}
        seed_cfg = yaml_config.get("seed") or {}
        logging_cfg = yaml_config.get("logging") or {}

        port_raw = os.getenv("FLATWIKI_PORT", server_cfg.get("port", 8080))
        try:
            port = int(port_raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {port_raw!r}") from None

        max_body_raw = server_cfg.get("max_body_bytes", DEFAULT_MAX_BODY_BYTES)
        try:
            max_body_bytes = int(max_body_raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid max_body_bytes: {max_body_raw!r}") from None

        server = ServerConfig(
            host=os.getenv("FLATWIKI_HOST", server_cfg.get("host", "0.0.0.0")),
            port=port,
            max_body_bytes=max_body_bytes,
        )

        storage = StorageConfig(
            root=os.getenv("FLATWIKI_STORAGE_ROOT", storage_cfg.get("root", "./created-pages")),
            extension=normalize_extension(
                os.getenv("FLATWIKI_PAGE_EXTENSION", storage_cfg.get("extension", ".html"))
            ),
        )

        seed = SeedConfig(
            title=seed_cfg.get("title", "TestPage"),
            body=seed_cfg.get("body", "This is a sample Page."),
        )

        logging_settings = LoggingConfig(
            file=os.getenv("FLATWIKI_LOG_FILE", logging_cfg.get("file") or ""),
        )

        templates_dir = yaml_config.get("templates_dir")

        return cls(
            site_name=yaml_config.get("site_name", "flatwiki"),
            server=server,
            storage=storage,
            seed=seed,
            logging=logging_settings,
            templates_dir=Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR,
        )


def normalize_extension(extension: str) -> str:
    """Ensure a page file extension starts with a dot ("txt" → ".txt")."""
    extension = extension.strip()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension
