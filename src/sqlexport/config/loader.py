"""
Profile loading.

Profiles live as one file per profile in a profiles directory. YAML
(``*.yaml``, ``*.yml``) and JSON (``*.json``) files are both read with
PyYAML's safe loader.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from sqlexport.config.profile import Profile
from sqlexport.config.resolver import resolve_config
from sqlexport.exceptions import ConfigurationError, ProfileNotFoundError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.config")

DEFAULT_PROFILES_DIR = "profiles"
PROFILE_PATTERNS = ("*.yaml", "*.yml", "*.json")

DEMO_PROFILE = Profile.from_dict(
    {
        "name": "default",
        "connection": {"type": "duckdb", "path": "data/demo.duckdb"},
        "query": "SELECT 42 AS answer, 'hello' AS greeting",
        "format": "CSV",
        "output_directory": "output",
        "command_timeout": 30,
    }
)


def load_profile_file(path: Path) -> Profile:
    """
    Load a single profile file.

    The file name (without suffix) is used as the profile name when the file
    does not set one.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            mark = e.problem_mark
            raise ConfigurationError(
                f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}: {e}",
                details={"file": str(path)},
            ) from e
        raise ConfigurationError(f"Error parsing {path.name}: {e}", details={"file": str(path)}) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read profile {path}: {e}", details={"file": str(path)}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Profile {path.name} must be a mapping, got {type(data).__name__}", details={"file": str(path)}
        )

    try:
        return Profile.from_dict(resolve_config(data), name=path.stem)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid profile {path.name}: {e}", details={"file": str(path)}) from e


def write_profile(profile: Profile, profiles_dir: Path) -> Path:
    """Write a profile as YAML and return its path."""
    profiles_dir.mkdir(parents=True, exist_ok=True)
    path = profiles_dir / f"{profile.name}.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(profile.to_dict(), f, sort_keys=False, allow_unicode=True)
    return path


class ProfileStore:
    """Named profiles loaded from a profiles directory."""

    def __init__(self, profiles: dict[str, Profile] | None = None, profiles_dir: Path | None = None):
        self.profiles: dict[str, Profile] = dict(profiles or {})
        self.profiles_dir = profiles_dir

    @classmethod
    def load(cls, profiles_dir: Path | str = DEFAULT_PROFILES_DIR, create_default: bool = True) -> "ProfileStore":
        """
        Load every profile file in a directory.

        Files that fail to load are logged and skipped. When the directory
        holds no profile files and ``create_default`` is set, a demo
        ``default.yaml`` is written first.
        """
        profiles_dir = Path(profiles_dir)
        files = _profile_files(profiles_dir)

        if not files and create_default:
            path = write_profile(DEMO_PROFILE, profiles_dir)
            logger.info(f"Created demo profile: {path}")
            files = [path]

        profiles: dict[str, Profile] = {}
        for path in files:
            try:
                profile = load_profile_file(path)
            except ConfigurationError as e:
                logger.error(f"Error loading profile from {path}: {e}")
                continue
            if not profile.name.strip():
                logger.warning(f"Skipping profile without a name: {path}")
                continue
            if profile.name in profiles:
                logger.warning(f"Duplicate profile '{profile.name}' in {path} overrides an earlier file")
            profiles[profile.name] = profile

        if not profiles:
            logger.warning("No valid profiles were loaded")

        return cls(profiles, profiles_dir)

    def get(self, name: str) -> Profile:
        """
        Get a profile by name.

        Raises:
            ProfileNotFoundError: If no profile has that name
        """
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileNotFoundError(name) from None

    def names(self) -> list[str]:
        """Profile names, sorted."""
        return sorted(self.profiles)

    def __contains__(self, name: str) -> bool:
        return name in self.profiles

    def __iter__(self) -> Iterator[Profile]:
        return (self.profiles[name] for name in self.names())

    def __len__(self) -> int:
        return len(self.profiles)


def _profile_files(profiles_dir: Path) -> list[Path]:
    if not profiles_dir.is_dir():
        return []
    files: set[Path] = set()
    for pattern in PROFILE_PATTERNS:
        files.update(profiles_dir.glob(pattern))
    return sorted(files)


def load_settings(path: Path) -> dict[str, Any]:
    """
    Load an optional application settings file (``sqlexport.yaml``).

    Returns an empty mapping when the file does not exist.
    """
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must be a mapping")
    return resolve_config(data)
