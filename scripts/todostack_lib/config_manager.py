"""
Configuration manager for the todo stack root directory
"""

import json
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict
from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackConfig:
    """Where the stack file and all item records live"""
    root: Path

    STACK_FILE_NAME = "list"
    LOCK_FILE_NAME = ".lock"
    LOG_FILE_NAME = ".todo-stack.log"

    @property
    def stack_file(self) -> Path:
        return self.root / self.STACK_FILE_NAME

    @property
    def lock_file(self) -> Path:
        return self.root / self.LOCK_FILE_NAME

    @property
    def log_file(self) -> Path:
        return self.root / self.LOG_FILE_NAME

    def item_file(self, identifier: str) -> Path:
        return self.root / identifier


class ConfigManager:
    """Resolves and persists the root directory"""

    CONFIG_FILE = Path.home() / ".todo-stack-config.json"
    DEFAULT_ROOT = Path.home() / ".todo-stack"
    ENV_VAR = "TODO_STACK_ROOT"

    def __init__(self, config_file: Optional[Path] = None):
        if config_file is not None:
            self.CONFIG_FILE = Path(config_file)

    def resolve(self, root: Optional[str] = None) -> StackConfig:
        """
        Resolve the root directory.

        Order: explicit argument, TODO_STACK_ROOT, config file, default.

        Args:
            root: Root given on the command line

        Returns:
            StackConfig for the resolved root
        """
        if root:
            source = "argument"
        elif os.environ.get(self.ENV_VAR):
            root = os.environ[self.ENV_VAR]
            source = self.ENV_VAR
        elif self._load_config_file().get("root"):
            root = self._load_config_file()["root"]
            source = str(self.CONFIG_FILE)
        else:
            root = self.DEFAULT_ROOT
            source = "default"

        resolved = Path(root).expanduser()
        logger.debug(f"Root directory {resolved} (from {source})")
        return StackConfig(root=resolved)

    def save_root(self, root: str) -> Path:
        """Persist the root directory to the config file"""
        resolved = Path(root).expanduser().resolve()

        config = self._load_config_file()
        config["root"] = str(resolved)
        config["root_configured_at"] = datetime.now().isoformat()
        self.CONFIG_FILE.write_text(json.dumps(config, indent=2))

        logger.info(f"Root directory saved to {self.CONFIG_FILE}: {resolved}")
        return resolved

    def _load_config_file(self) -> Dict:
        """Load config file from disk"""
        if not self.CONFIG_FILE.exists():
            return {}

        try:
            config = json.loads(self.CONFIG_FILE.read_text())
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt config file {self.CONFIG_FILE}")
            return {}

        return config if isinstance(config, dict) else {}
