"""Settings source that re-reads a YAML file on every load."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from pg_promoter.domain.exceptions import PromoterConfigError
from pg_promoter.domain.settings import PromoterSettings
from pg_promoter.usecases.config_parser import ConfigParser


class YamlSettingsSource:
    """SettingsSourcePort implementation reading a YAML configuration file.

    The file is read again on each load() so that a reload signal picks up
    edits made since startup.
    """

    def __init__(
        self, config_path: Path, environ: Mapping[str, str] | None = None
    ) -> None:
        """Initialize the source.

        Args:
            config_path: Path to the YAML configuration file.
            environ: Environment used for fallbacks. Defaults to os.environ.
        """
        self._config_path = Path(config_path)
        self._parser = ConfigParser(environ=environ)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> PromoterSettings:
        """Read and parse the configuration file.

        Raises:
            PromoterConfigError: If the file cannot be read or is invalid.
        """
        try:
            yaml_str = self._config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PromoterConfigError(
                f"Could not read config file {self._config_path}: {e}"
            ) from e
        return self._parser.parse(yaml_str)
