"""Loading the application graph from the home directory and installed modules.

The graph is assembled from two kinds of documents:

- the application configuration, ``application.jsonld`` in the home
  directory, or the default configuration when the home directory has none;
- one document per installed module, advertised through the
  ``graphbinder.modules`` entry point group.

A document that cannot be read is logged and skipped, so one broken module
does not keep the rest of the application from starting.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from importlib import import_module
from importlib.metadata import entry_points
from importlib.resources import files
from pathlib import Path
from typing import Any, Optional

from graphbinder import jsonld
from graphbinder.graph import Graph

__all__ = [
    "BootstrapConfig",
    "discover_home",
    "install_default_configuration",
    "load_configuration",
    "load_modules",
    "bootstrap",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapConfig:
    """Where the application graph is read from.

    Attributes:
        home_variable: Environment variable holding the home directory.
        home_directory_name: Directory in the working directory used as home
            when the variable is not set.
        configuration_name: File name of the application configuration.
        module_group: Entry point group listing modules that contribute to
            the graph.
        module_resource: Resource read from each of those modules.
        default_configuration: Configuration used when the home directory has
            none; a path or an ``importlib.resources`` traversable.
    """

    home_variable: str = "GRAPHBINDER_HOME"
    home_directory_name: str = "graphbinder"
    configuration_name: str = "application.jsonld"
    module_group: str = "graphbinder.modules"
    module_resource: str = "graphbinder.jsonld"
    default_configuration: Optional[Any] = None

    @classmethod
    def for_package(
        cls, package: str, resource: str = "application.jsonld", **fields
    ) -> "BootstrapConfig":
        """Use the ``resource`` shipped in ``package`` as default configuration.

        Example:
            >>> config = BootstrapConfig.for_package("myapp")
            >>> binder = GraphBinder("urn:example:Application", activator, config=config)
        """
        return cls(default_configuration=files(package) / resource, **fields)


def discover_home(
    config: BootstrapConfig, home: Optional[Path] = None
) -> Optional[Path]:
    """Find the home directory.

    The first of: the ``home`` argument, the environment variable named by
    ``config.home_variable`` and ``config.home_directory_name`` in the working
    directory. Explicitly configured directories are created if missing.

    Returns:
        The home directory, or None when there is none.
    """
    if home is not None:
        logger.info("Home directory is set explicitly: %s", home)
    else:
        value = os.environ.get(config.home_variable)
        if value:
            home = Path(value)
            logger.info(
                "Home directory is set to value of environment variable %s: %s",
                config.home_variable,
                home,
            )
        else:
            logger.info("Environment variable %s has not been set", config.home_variable)

    if home is not None:
        home = Path(home)
        if not home.is_dir():
            home.mkdir(parents=True, exist_ok=True)
            logger.info("Created home directory: %s", home)
        return home

    candidate = Path(config.home_directory_name)
    if candidate.is_dir():
        logger.info("Home directory found in working directory: %s", candidate.absolute())
        return candidate

    logger.info("Home directory is not set - will continue without a home directory")
    return None


def install_default_configuration(home: Path, config: BootstrapConfig):
    """Copy the default configuration into ``home`` unless one is there already."""
    target = home / config.configuration_name
    if target.exists():
        return
    if config.default_configuration is None:
        logger.info(
            "There is no file named %s in the home directory and no default configuration",
            config.configuration_name,
        )
        return
    logger.warning(
        "There is no file named %s in the home directory - "
        "a file with default configuration will be created",
        config.configuration_name,
    )
    try:
        with config.default_configuration.open("rb") as source, target.open("wb") as sink:
            shutil.copyfileobj(source, sink)
    except OSError:
        logger.exception(
            "Error copying default configuration to file %s in the home directory",
            config.configuration_name,
        )


def load_configuration(graph: Graph, home: Optional[Path], config: BootstrapConfig):
    """Add the application configuration to ``graph``."""
    if home is not None and (home / config.configuration_name).exists():
        logger.info(
            "Reading configuration from file %s in the home directory",
            config.configuration_name,
        )
        _read_into(graph, home / config.configuration_name)
    elif config.default_configuration is not None:
        logger.info("Reading default configuration")
        _read_into(graph, config.default_configuration)
    else:
        logger.info("No default configuration to read")


def load_modules(graph: Graph, config: BootstrapConfig) -> int:
    """Add the documents of all modules in ``config.module_group`` to ``graph``.

    Each entry point names a module or package; its ``config.module_resource``
    resource is read.

    Returns:
        The number of module documents read.
    """
    count = 0
    for ep in entry_points(group=config.module_group):
        try:
            resource = files(import_module(ep.module)) / config.module_resource
        except Exception:
            logger.exception("Could not load module %s (%s)", ep.name, ep.value)
            continue
        if _read_into(graph, resource):
            count += 1
    return count


def bootstrap(
    config: Optional[BootstrapConfig] = None, home: Optional[Path] = None
) -> tuple[Graph, Optional[Path]]:
    """Build the application graph.

    Args:
        config: Where to look for configuration; defaults to
            :class:`BootstrapConfig` defaults.
        home: Home directory overriding discovery.

    Returns:
        The loaded graph and the home directory, if one was found.
    """
    config = config or BootstrapConfig()
    home = discover_home(config, home)
    if home is not None:
        install_default_configuration(home, config)

    graph = Graph()
    load_configuration(graph, home, config)
    load_modules(graph, config)
    logger.info("Loaded %d triples", len(graph))
    return graph, home


def _read_into(graph: Graph, resource) -> bool:
    try:
        with resource.open("r", encoding="utf-8") as fp:
            graph.add(jsonld.load(fp))
        return True
    except Exception:
        logger.exception("Could not read configuration resource %s", resource)
        return False
