"""
Theme loader for printdown documents.

A theme is a directory containing:
  - theme.yaml: Style defaults (colors, sizes, page setup, code style)
  - theme.css: Base stylesheet, treated as opaque text

Document settings and CLI options override the theme.yaml defaults; the
stylesheet itself is only ever prefixed with override rules.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union

PACKAGE_THEMES_DIR = Path(__file__).resolve().parent.parent / "themes"


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


class Theme:
    """
    Represents a printdown theme.

    A theme consists of:
      - Configuration (colors, sizes, page setup) from theme.yaml
      - Base CSS from theme.css
    """

    def __init__(self, theme_name: str, themes_dir: Optional[Union[str, Path]] = None):
        """
        Load a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "default")
            themes_dir: Path to themes directory (default: packaged themes)

        Raises:
            ThemeError: If theme directory or theme.yaml doesn't exist
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else PACKAGE_THEMES_DIR
        self.theme_dir = self.themes_dir / theme_name

        if not self.theme_dir.is_dir():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()
        self.css_path = self.theme_dir / "theme.css"

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ThemeError(f"Theme '{self.name}': theme.yaml must be a mapping")
        return config

    def css_get(self) -> str:
        """Theme stylesheet text, or empty string if the theme has none"""
        if not self.css_path.exists():
            return ""
        return self.css_path.read_text(encoding='utf-8')

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation:
          theme.config_get('colors.link', '#0066cc')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def pygmentsStyle_get(self) -> str:
        """
        Get Pygments style name for fenced code highlighting.

        Returns:
            Pygments style name (default: 'default')
        """
        return str(self.config_get('code.pygments_style', 'default'))

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[Union[str, Path]] = None) -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory (default: packaged themes)

    Returns:
        List of theme names (directory names with a theme.yaml)
    """
    themes_path: Path = Path(themes_dir) if themes_dir else PACKAGE_THEMES_DIR

    if not themes_path.exists():
        return []

    return sorted(
        item.name
        for item in themes_path.iterdir()
        if item.is_dir() and (item / "theme.yaml").exists()
    )
