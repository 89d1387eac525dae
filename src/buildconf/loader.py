"""Build configuration loader."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import toml
from pydantic import ValidationError

from buildconf.clean import CleanAction
from buildconf.common import LayeredConfigLoader, LogContext, normalize_path
from buildconf.errors import ConfigError
from buildconf.evaluation import EvaluationGraph
from buildconf.layout import compute_build_dir, compute_build_dirs, resolve_root_build_dir
from buildconf.models import BuildConfiguration, PluginRef, RepositorySource
from buildconf.schema import ProjectConfig

logger = logging.getLogger(__name__)

APP_NAME = "buildconf"
DEFAULT_CONFIG_FILENAME = "buildconf.toml"
DEFAULT_REPOSITORIES = (RepositorySource.GOOGLE, RepositorySource.MAVEN_CENTRAL)

# Pinned versions only: 4.4.2, 1.0.0-alpha01, 2.0.21-RC (no dynamic "4.+")
VERSION_PATTERN = re.compile(r"\d+(\.\d+)*([-+.][0-9A-Za-z]+([.+-][0-9A-Za-z]+)*)?")
PLUGIN_ID_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*(\.[A-Za-z][A-Za-z0-9_-]*)*")


def _subproject_reference(name: str) -> str:
    """Accept Gradle path notation (``:app``) for a top-level subproject."""
    return name[1:] if name.startswith(":") else name


class ConfigLoader:
    """Resolves a declarative project configuration for the build tool.

    The loader itself holds no global state. A successful :meth:`load`
    returns a frozen :class:`BuildConfiguration` and records the clean
    action and evaluation graph on the loader; a failed load leaves the
    loader exactly as it was.
    """

    def __init__(self, project: ProjectConfig, project_dir: Path, app_name: str = APP_NAME) -> None:
        self.project = project
        self.project_dir = Path(project_dir)
        self.app_name = app_name
        self.actions: Dict[str, CleanAction] = {}
        self.graph = EvaluationGraph()
        for entry in project.subprojects:
            self.graph.add_subproject(entry.name)
        self._configuration: Optional[BuildConfiguration] = None

    @classmethod
    def from_file(
        cls,
        config_path: Optional[Path] = None,
        project_dir: Optional[Path] = None,
        app_name: str = APP_NAME,
    ) -> "ConfigLoader":
        """Create a loader from the project file and the layered settings sources.

        Args:
            config_path: Project file; defaults to ``<project_dir>/buildconf.toml``
            project_dir: Project directory; defaults to the config file's
                directory, or the current directory
            app_name: Name used for system/user config lookup and env prefix

        Raises:
            ConfigError: If the file is missing, not valid TOML or fails validation
        """
        if project_dir is None:
            project_dir = config_path.parent if config_path else Path.cwd()
        project_dir = Path(project_dir).absolute()
        if config_path is None:
            config_path = project_dir / DEFAULT_CONFIG_FILENAME

        settings = LayeredConfigLoader(app_name=app_name, config_class=ProjectConfig)
        try:
            project = settings.load(config_path)
        except FileNotFoundError as e:
            raise ConfigError(str(e), config_file=str(config_path)) from e
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Invalid TOML in configuration: {e}", config_file=str(config_path)) from e
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration: {e.error_count()} error(s)\n{e}",
                config_file=str(config_path),
            ) from e
        except OSError as e:
            raise ConfigError(f"Cannot read configuration: {e}", config_file=str(config_path)) from e

        logger.debug(f"Configuration sources: {[str(p) for p in settings.sources]}")
        return cls(project, project_dir=project_dir, app_name=app_name)

    def load_plugins(self) -> List[PluginRef]:
        """Return declared plugins in declaration order.

        Raises:
            ConfigError: If a plugin id is invalid or repeated, or its version
                is absent or malformed
        """
        plugins: List[PluginRef] = []
        seen: set[str] = set()

        for entry in self.project.plugins:
            if not PLUGIN_ID_PATTERN.fullmatch(entry.id):
                raise ConfigError(f"Invalid plugin id: {entry.id!r}", plugin=entry.id)
            if entry.id in seen:
                raise ConfigError(f"Plugin declared more than once: {entry.id}", plugin=entry.id)
            if entry.version is None or not entry.version.strip():
                raise ConfigError(f"Plugin {entry.id} has no version", plugin=entry.id)
            if not VERSION_PATTERN.fullmatch(entry.version):
                raise ConfigError(
                    f"Plugin {entry.id} has malformed version {entry.version!r}",
                    plugin=entry.id,
                    version=entry.version,
                )
            seen.add(entry.id)
            plugins.append(PluginRef(id=entry.id, version=entry.version, apply_by_default=entry.apply))

        return plugins

    def resolve_repositories(self) -> List[RepositorySource]:
        """Return repositories in lookup priority order without duplicates.

        Raises:
            ConfigError: If a repository name is unknown
        """
        if self.project.repositories is None:
            return list(DEFAULT_REPOSITORIES)

        repositories: List[RepositorySource] = []
        for name in self.project.repositories:
            try:
                source = RepositorySource(name)
            except ValueError:
                known = ", ".join(s.value for s in RepositorySource)
                raise ConfigError(f"Unknown repository {name!r} (known: {known})", repository=name) from None
            if source not in repositories:
                repositories.append(source)
        return repositories

    compute_build_dir = staticmethod(compute_build_dir)

    def register_clean_action(self, target_dir: Path) -> CleanAction:
        """Register the clean action deleting ``target_dir``.

        Replaces any previously registered clean action.
        """
        action = CleanAction(target_dir, protected_dir=self.project_dir)
        self.actions[action.name] = action
        logger.debug(f"Registered clean action for {target_dir}")
        return action

    def set_evaluation_order(self, dependent: str, dependency: str) -> None:
        """Record that ``dependent`` must be configured after ``dependency``.

        Raises:
            ConfigError: If either subproject is not declared
            CycleError: If the edge would introduce a cycle
        """
        self.graph.set_evaluation_order(
            _subproject_reference(dependent), _subproject_reference(dependency)
        )

    def _build_graph(self) -> EvaluationGraph:
        graph = self.graph.copy()

        for entry in self.project.subprojects:
            for dependency in entry.evaluation_depends_on:
                graph.set_evaluation_order(entry.name, _subproject_reference(dependency))

        common = self.project.evaluation.common_dependency
        if common is not None:
            common = _subproject_reference(common)
            if common not in graph:
                raise ConfigError(
                    f"Common evaluation dependency is not a declared subproject: {common}",
                    subproject=common,
                )
            for name in graph.subprojects:
                if name != common:
                    graph.set_evaluation_order(name, common)

        return graph

    def load(self) -> BuildConfiguration:
        """Resolve the whole configuration.

        Raises:
            ConfigError: On malformed plugins, repositories or subprojects
            CycleError: If the evaluation order contains a cycle
        """
        with LogContext(logger, project_dir=str(self.project_dir)):
            plugins = self.load_plugins()
            repositories = self.resolve_repositories()

            root_build_dir = resolve_root_build_dir(
                self.project_dir, self.project.build.base_dir, self.app_name
            )
            build_dirs = compute_build_dirs(
                root_build_dir, (entry.name for entry in self.project.subprojects)
            )

            graph = self._build_graph()
            evaluation_order = graph.evaluation_order()

            configuration = BuildConfiguration(
                project_dir=normalize_path(self.project_dir),
                plugins=tuple(plugins),
                repositories=tuple(repositories),
                root_build_dir=normalize_path(root_build_dir),
                build_dirs={name: normalize_path(path) for name, path in build_dirs.items()},
                subprojects=tuple(graph.refs()),
                evaluation_order=tuple(evaluation_order),
                clean_target=normalize_path(root_build_dir),
            )

            self.graph = graph
            self.register_clean_action(root_build_dir)
            self._configuration = configuration

            logger.info(
                f"Loaded {len(plugins)} plugin(s), {len(repositories)} repositories, "
                f"{len(build_dirs)} subproject(s); build dir {root_build_dir}"
            )

        return configuration

    @property
    def configuration(self) -> BuildConfiguration:
        """Get the loaded configuration, loading it on first access."""
        if self._configuration is None:
            self._configuration = self.load()
        return self._configuration

    @property
    def clean_action(self) -> Optional[CleanAction]:
        return self.actions.get(CleanAction.name)
