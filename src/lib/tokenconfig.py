"""
Token configuration: config files and automatic tokens

Config files come in two flavours, picked by extension:

  key=value (any other extension, e.g. 2pdf.config):
      # comment
      DEVELOPER_NAME=John Doe
      PROJECT_NAME=

  YAML (.yaml / .yml): a flat mapping of token names to scalar values.

An empty or missing PROJECT_NAME falls back to the name of the current
directory. Automatic tokens are derived from the clock and the environment
and handed out as a read-only mapping.
"""

import getpass
import os
import socket
import yaml
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .log import LOG


class TokenConfigError(Exception):
    """Raised when a token config file is missing or cannot be parsed"""
    pass


def configText_parse(text: str) -> Dict[str, str]:
    """
    Parse key=value token config text

    Blank lines, '#' comments, lines without '=' and lines with an empty
    key are skipped. Keys and values are trimmed.

    Example:
        >>> configText_parse("# c\\nA=1\\nbad line\\n=x\\nB=")
        {'A': '1', 'B': ''}
    """
    config: Dict[str, str] = {}

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue

        key, sep, value = stripped.partition('=')
        if not sep:
            continue

        key = key.strip()
        if key:
            config[key] = value.strip()

    return config


def configYaml_parse(text: str) -> Dict[str, str]:
    """Parse a YAML token mapping; values are stringified, None becomes ''"""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TokenConfigError(f"Failed to parse YAML token config: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TokenConfigError("YAML token config must be a mapping of token names to values")

    return {
        str(key): '' if value is None else str(value)
        for key, value in data.items()
    }


def tokens_loadFile(
    config_path: Union[str, Path], current_dir: Optional[Union[str, Path]] = None
) -> Dict[str, str]:
    """
    Load config tokens from an explicit file

    Args:
        config_path: Path to the token config file
        current_dir: Directory whose name backs PROJECT_NAME (default: cwd)

    Returns:
        Token name to value mapping

    Raises:
        TokenConfigError: If the file does not exist or cannot be parsed
    """
    path = Path(config_path)
    if not path.is_file():
        raise TokenConfigError(f"Config file not found: {path}")

    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TokenConfigError(f"Failed to read config file {path}: {e}")

    if path.suffix.lower() in ('.yaml', '.yml'):
        config = configYaml_parse(text)
    else:
        config = configText_parse(text)

    if not config.get('PROJECT_NAME'):
        config['PROJECT_NAME'] = Path(current_dir or os.getcwd()).resolve().name

    LOG(f"Using config file: {path} ({len(config)} tokens)", level=1)
    return config


def username_get() -> str:
    """Current user name, falling back to environment variables"""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get('USER') or os.environ.get('USERNAME') or ''


def tokens_automatic(
    now: Optional[datetime] = None,
    current_dir: Optional[Union[str, Path]] = None,
    script_dir: Optional[Union[str, Path]] = None,
) -> Mapping[str, str]:
    """
    Build the automatic token mapping

    Args:
        now: Timestamp to derive date/time tokens from (default: now)
        current_dir: Working directory for PWD (default: cwd)
        script_dir: Installation directory for SCRIPT_DIR (default: package dir)

    Returns:
        Read-only mapping of automatic token names to values

    Example:
        For now=datetime(2026, 3, 7, 9, 5):
        DATE="2026-03-07", DATE_LONG="March 7, 2026", TIME_NOW="09:05"
    """
    now = now or datetime.now()
    date_today = now.strftime('%Y-%m-%d')
    date_long = f"{now.strftime('%B')} {now.day}, {now.year}"
    time_now = now.strftime('%H:%M')

    tokens = {
        'DATE': date_today,
        'DATE_TODAY': date_today,
        'DATE_LONG': date_long,
        'DATE_TODAY_LONG': date_long,
        'TIME_NOW': time_now,
        'DATETIME_NOW': f"{date_today} {time_now}",
        'TIMESTAMP': str(int(now.timestamp())),
        'YEAR': f"{now.year:04d}",
        'MONTH': f"{now.month:02d}",
        'DAY': f"{now.day:02d}",
        'HOSTNAME': socket.gethostname(),
        'USERNAME': username_get(),
        'PWD': str(current_dir or os.getcwd()),
        'SCRIPT_DIR': str(script_dir or Path(__file__).resolve().parent.parent),
    }

    return MappingProxyType(tokens)
