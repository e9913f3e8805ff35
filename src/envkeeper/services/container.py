"""
Centralized services container module for envkeeper.

Builds the scanner, writer, sandbox and EnvService from configuration so
every entry point wires them the same way.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from envkeeper.core.atomic_writer import AtomicWriter
from envkeeper.core.config import EnvKeeperConfig, load_config
from envkeeper.core.file_scanner import EnvFileScanner
from envkeeper.core.path_sandbox import PathSandbox
from envkeeper.services.env_service import EnvService


@dataclass
class ServicesContainer:
    """
    Container holding all shared service instances.

    Attributes:
        config: Application configuration
        sandbox: Shared path sandbox
        env_service: Operation surface built on the sandbox
    """

    config: EnvKeeperConfig
    sandbox: PathSandbox
    env_service: EnvService


def create_services(
    config_path: Optional[Path] = None,
    config: Optional[EnvKeeperConfig] = None,
) -> ServicesContainer:
    """
    Create and initialize all services.

    Args:
        config_path: Optional path to configuration file. Ignored when config is given.
        config: Optional preloaded configuration.

    Returns:
        ServicesContainer with all initialized services.
    """
    config = config or load_config(config_path)

    scanner = EnvFileScanner(ignored_dirs=config.scanner.ignored_dirs)
    writer = AtomicWriter(preserve_mode=config.writer.preserve_mode)
    sandbox = PathSandbox()

    env_service = EnvService(scanner=scanner, writer=writer, sandbox=sandbox)

    return ServicesContainer(config=config, sandbox=sandbox, env_service=env_service)
