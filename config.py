"""Configuration management for Chatport.

Reads configuration from ~/.config/chatport.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_API_BASE_URL = "http://localhost:3010"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    api_base_url: str
    upload_transport: str
    upload_chunk_size: int
    report_transfer_errors: bool
    settings_filename: str

    @property
    def lambda_url(self) -> str:
        """Get the base URL of the importer RPC router."""
        return f"{self.api_base_url.rstrip('/')}/trpc/lambda"

    @property
    def edge_url(self) -> str:
        """Get the base URL of the upload RPC router."""
        return f"{self.api_base_url.rstrip('/')}/trpc/edge"

    @property
    def settings_path(self) -> Path:
        """Get the full settings file path (base_dir/filename)."""
        return self.base_dir / self.settings_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "chatport"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            api_base_url=DEFAULT_API_BASE_URL,
            upload_transport="httpx",
            upload_chunk_size=64 * 1024,
            report_transfer_errors=False,
            settings_filename="settings.yaml",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "chatport.toml"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "chatport"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    api_config = data.get("api", {})
    api_base_url = api_config.get("base_url", DEFAULT_API_BASE_URL)

    upload_config = data.get("upload", {})
    upload_transport = upload_config.get("transport", "httpx")
    upload_chunk_size = int(upload_config.get("chunk_size", 64 * 1024))
    report_transfer_errors = upload_config.get("report_transfer_errors", False)

    settings_config = data.get("settings", {})
    settings_filename = settings_config.get("file", "settings.yaml")

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        api_base_url=api_base_url,
        upload_transport=upload_transport,
        upload_chunk_size=upload_chunk_size,
        report_transfer_errors=report_transfer_errors,
        settings_filename=settings_filename,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "api": {
            "base_url": config.api_base_url,
        },
        "upload": {
            "transport": config.upload_transport,
            "chunk_size": config.upload_chunk_size,
            "report_transfer_errors": config.report_transfer_errors,
        },
        "settings": {
            "file": config.settings_filename,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
