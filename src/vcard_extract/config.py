from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONF_NAME = "vcard-extract.conf"


@dataclass
class Settings:
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    default_region: str = ""          # empty: leave phone numbers as written
    export_dir: str = "cards-export"


DEFAULT_CONF = """# vcard-extract local config (TOML)
delimiter = ","
encoding = "utf-8-sig"
# ISO-2 region used to reformat phone numbers, e.g. "GB". Empty = off.
default_region = ""
export_dir = "cards-export"
"""


def conf_path(base: Path | None = None) -> Path:
    return Path(base or os.getcwd()) / "local" / CONF_NAME


def load_settings(path: Path) -> Settings:
    """Read settings from ``path``; missing or malformed config gives defaults."""
    settings = Settings()
    if not path.exists():
        return settings
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring malformed config %s: %s", path, exc)
        return settings

    settings.delimiter = str(data.get("delimiter", settings.delimiter)) or ","
    settings.encoding = str(data.get("encoding", settings.encoding))
    settings.default_region = str(data.get("default_region", settings.default_region)).upper()
    settings.export_dir = str(data.get("export_dir", settings.export_dir))
    return settings


def ensure_workspace(base: Path | None = None) -> tuple[Path, Settings]:
    """Create local/vcard-extract.conf with defaults if absent, then load it."""
    conf = conf_path(base)
    conf.parent.mkdir(parents=True, exist_ok=True)
    if not conf.exists():
        conf.write_text(DEFAULT_CONF, encoding="utf-8")
    return conf, load_settings(conf)
