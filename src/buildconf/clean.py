"""The "clean" action: delete the build output tree."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from buildconf.common import collapse_path
from buildconf.errors import CleanError

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    """Outcome of running a clean action.

    Attributes:
        target_dir: Directory the action was asked to delete
        removed: True if a directory tree was actually deleted
        error: Failure, if any; a missing target is not a failure
    """
    target_dir: Path
    removed: bool = False
    error: Optional[CleanError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CleanAction:
    """Recursively deletes a build output directory.

    Running the action is idempotent: a target that no longer exists is
    reported as a successful no-op. Filesystem errors are logged and
    returned on the result, never raised.
    """

    name = "clean"

    def __init__(self, target_dir: Path, protected_dir: Optional[Path] = None) -> None:
        self.target_dir = Path(target_dir)
        self.protected_dir = protected_dir

    def _guard(self, target: Path) -> None:
        if target == Path(target.anchor):
            raise CleanError(f"Refusing to delete filesystem root: {target}", target_dir=str(target))
        if self.protected_dir is None:
            return
        protected = collapse_path(self.protected_dir.absolute())
        if target == protected or target in protected.parents:
            raise CleanError(
                f"Refusing to delete {target}: it contains the project directory {protected}",
                target_dir=str(target),
                project_dir=str(protected),
            )

    def run(self) -> CleanResult:
        target = collapse_path(self.target_dir.absolute())
        result = CleanResult(target_dir=target)

        try:
            self._guard(target)
        except CleanError as e:
            logger.error(e.message)
            result.error = e
            return result

        if not target.exists():
            logger.info(f"Nothing to clean, {target} does not exist")
            return result

        if not target.is_dir():
            result.error = CleanError(f"Clean target is not a directory: {target}", target_dir=str(target))
            logger.error(result.error.message)
            return result

        try:
            shutil.rmtree(target)
        except FileNotFoundError:
            # Removed concurrently; the tree is gone either way
            logger.debug(f"{target} disappeared during clean")
        except OSError as e:
            result.error = CleanError(
                f"Failed to delete {target}: {e}",
                target_dir=str(target),
                errno=e.errno,
            )
            logger.error(result.error.message)
            return result

        result.removed = True
        logger.info(f"Deleted build directory {target}")
        return result
