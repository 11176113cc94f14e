"""Package manager detection from lock files.

Pure function over the filesystem with no network access or state. Priority is fixed
``pnpm > yarn > npm``; the first lock file found wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import structlog

log = structlog.get_logger()

PackageManagerName = Literal["npm", "yarn", "pnpm"]
PackageManagerAction = Literal["install", "add", "remove", "run"]

DETECTION_PRIORITY: tuple[PackageManagerName, ...] = ("pnpm", "yarn", "npm")

LOCK_FILES: dict[PackageManagerName, str] = {
    "npm": "package-lock.json",
    "yarn": "yarn.lock",
    "pnpm": "pnpm-lock.yaml",
}

DLX_PREFIXES: dict[PackageManagerName, str] = {
    "npm": "npx",
    "yarn": "yarn dlx",
    "pnpm": "pnpm dlx",
}


@dataclass(frozen=True)
class PackageManagerInfo:
    """Commands for one package manager."""

    name: PackageManagerName
    install_cmd: str
    add_cmd: str
    remove_cmd: str
    run_cmd: str

    @property
    def dlx_prefix(self) -> str:
        """Prefix that executes a package binary without installing it."""
        return DLX_PREFIXES[self.name]

    def command_for(self, action: PackageManagerAction) -> str:
        return {
            "install": self.install_cmd,
            "add": self.add_cmd,
            "remove": self.remove_cmd,
            "run": self.run_cmd,
        }[action]

    def run_script(self, script_name: str) -> str:
        return f"{self.run_cmd} {script_name}"


_COMMANDS: dict[PackageManagerName, PackageManagerInfo] = {
    "npm": PackageManagerInfo(
        name="npm",
        install_cmd="npm install",
        add_cmd="npm install",
        remove_cmd="npm uninstall",
        run_cmd="npm run",
    ),
    "yarn": PackageManagerInfo(
        name="yarn",
        install_cmd="yarn",
        add_cmd="yarn add",
        remove_cmd="yarn remove",
        run_cmd="yarn",
    ),
    "pnpm": PackageManagerInfo(
        name="pnpm",
        install_cmd="pnpm install",
        add_cmd="pnpm add",
        remove_cmd="pnpm remove",
        run_cmd="pnpm",
    ),
}


def package_manager_info(name: PackageManagerName) -> PackageManagerInfo:
    """Return the descriptor for a known package manager name."""
    return _COMMANDS[name]


def detect_package_manager(
    cwd: str | Path | None = None,
    default_manager: PackageManagerName = "npm",
) -> PackageManagerInfo:
    """Detect the package manager used in ``cwd`` from its lock file.

    Falls back to ``default_manager`` when no lock file is present (including
    when ``cwd`` does not exist).
    """
    root = Path(cwd).expanduser() if cwd else Path.cwd()

    for name in DETECTION_PRIORITY:
        lock_path = root / LOCK_FILES[name]
        if lock_path.is_file():
            log.debug("package_manager_detected", name=name, lock_file=str(lock_path))
            return _COMMANDS[name]

    log.debug("package_manager_defaulted", name=default_manager, cwd=str(root))
    return _COMMANDS[default_manager]
