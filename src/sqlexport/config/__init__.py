"""
Profile configuration.
"""

from sqlexport.config.loader import DEFAULT_PROFILES_DIR, ProfileStore, load_profile_file, load_settings, write_profile
from sqlexport.config.profile import NotificationSettings, Profile
from sqlexport.config.resolver import resolve_config

__all__ = [
    "DEFAULT_PROFILES_DIR",
    "Profile",
    "NotificationSettings",
    "ProfileStore",
    "load_profile_file",
    "load_settings",
    "write_profile",
    "resolve_config",
]
