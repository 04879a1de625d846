"""Application settings — persistence via JSON."""

import json
import logging
import os
from dataclasses import dataclass, asdict

from selfcheck.core.models import ResourceKind, ResourceRequirement

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.environ.get('SELFCHECK_DATA_DIR', 'data')


@dataclass
class AppSettings:
    """Persistent application settings."""
    # Data directory and the files kept in it
    data_dir: str = ""
    config_file: str = ""
    datastore: str = ""
    ban_file: str = ""
    log_file: str = ""
    update_check_file: str = ""

    # Caches and templates
    page_cache: str = "pagecache"
    thumbnails_cache: str = "cache"
    tmp_dir: str = "tmp"
    template_dir: str = "tpl"
    theme: str = "default"

    # Updates
    check_updates: bool = False
    check_updates_branch: str = "stable"   # 'stable' or 'latest'
    check_updates_interval: int = 86400    # seconds between two remote checks
    check_updates_timeout: float = 2       # seconds

    # Runtime
    min_python_version: str = "3.10"

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR
        if not self.config_file:
            self.config_file = os.path.join(self.data_dir, 'config.json')
        if not self.datastore:
            self.datastore = os.path.join(self.data_dir, 'datastore.json')
        if not self.ban_file:
            self.ban_file = os.path.join(self.data_dir, 'ipbans.json')
        if not self.log_file:
            self.log_file = os.path.join(self.data_dir, 'log.txt')
        if not self.update_check_file:
            self.update_check_file = os.path.join(self.data_dir, 'lastupdatecheck.txt')

    @property
    def theme_dir(self) -> str:
        return os.path.join(self.template_dir.rstrip('/'), self.theme)

    @staticmethod
    def load(path: str | None = None) -> 'AppSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'config.json')

        if not os.path.isfile(path):
            logger.info("No settings file at %s, using defaults", path)
            return AppSettings(config_file=path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file must hold a JSON object")
            data = {k: v for k, v in data.items()
                    if k in AppSettings.__dataclass_fields__}
            data.setdefault('config_file', path)
            settings = AppSettings(**data)
            logger.info("Loaded settings from %s", path)
            return settings
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load settings: %s", e)
            return AppSettings(config_file=path)

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = self.config_file

        parent = os.path.dirname(path)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, indent=2)
            logger.info("Saved settings to %s", path)
        except OSError as e:
            logger.warning("Failed to save settings: %s", e)

    def resource_requirements(self) -> list[ResourceRequirement]:
        """Paths the application needs, in the order they are audited."""
        d = ResourceKind.DIRECTORY
        f = ResourceKind.FILE
        return [
            # Templates are only read
            ResourceRequirement('template_dir', self.template_dir, d, minimal=True),
            ResourceRequirement('theme_dir', self.theme_dir, d, minimal=True),
            # Caches and data are read and written
            ResourceRequirement('thumbnails_cache', self.thumbnails_cache, d,
                                must_be_writable=True),
            ResourceRequirement('data_dir', self.data_dir, d, must_be_writable=True),
            ResourceRequirement('page_cache', self.page_cache, d, must_be_writable=True),
            ResourceRequirement('tmp_dir', self.tmp_dir, d,
                                must_be_writable=True, minimal=True),
            # Files may not exist yet on a fresh install
            ResourceRequirement('config_file', self.config_file, f,
                                must_be_writable=True, optional=True),
            ResourceRequirement('datastore', self.datastore, f,
                                must_be_writable=True, optional=True),
            ResourceRequirement('ban_file', self.ban_file, f,
                                must_be_writable=True, optional=True),
            ResourceRequirement('log_file', self.log_file, f,
                                must_be_writable=True, optional=True),
            ResourceRequirement('update_check_file', self.update_check_file, f,
                                must_be_writable=True, optional=True),
        ]
