"""Config file discovery and corpus location.

Walk-up finder locates hooksig.toml, similar to how git finds .git/.
Supports HOOKSIG_CONFIG env var and --config CLI flag overrides.

The hook corpus normally lives in the analyzed project's Composer vendor
tree. When hooksig itself is installed inside a vendor tree, the corpus is
looked up next to it instead.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from hooksig.config.models import HooksigConfig

CONFIG_FILENAME = "hooksig.toml"
CONFIG_ENV_VAR = "HOOKSIG_CONFIG"
VENDOR_CORPUS_PATH = Path("vendor") / "johnbillion" / "wp-hooks" / "hooks"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for hooksig.toml.

    Returns the path to the config file, or None if not found.
    Checks HOOKSIG_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> HooksigConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default HooksigConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return HooksigConfig()

    raw = path.read_text(encoding="utf-8")
    data: dict[str, Any] = tomllib.loads(raw)
    return HooksigConfig.model_validate(data)


def resolve_corpus_dir(
    project_root: Path,
    configured: Path | None = None,
    *,
    package_dir: Path | None = None,
) -> Path:
    """Locate the directory holding ``actions.json`` and ``filters.json``.

    Order: an explicitly configured directory (relative to *project_root*),
    then ``vendor/johnbillion/wp-hooks/hooks`` under *project_root*, then the
    same path under the nearest ``vendor/`` directory enclosing
    *package_dir*. Falls back to the project-root path even if missing.
    """
    if configured is not None:
        return configured if configured.is_absolute() else project_root / configured

    candidate = project_root / VENDOR_CORPUS_PATH
    if candidate.is_dir():
        return candidate

    base = (package_dir or Path(__file__).parent).resolve()
    for parent in base.parents:
        if parent.name == VENDOR_CORPUS_PATH.parts[0]:
            vendored = parent.joinpath(*VENDOR_CORPUS_PATH.parts[1:])
            if vendored.is_dir():
                return vendored
            break
    return candidate
