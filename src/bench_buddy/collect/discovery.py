import logging
import xml.etree.ElementTree as ET  # nosec B405 - local project files only
from pathlib import Path

from ..config import BENCHMARK_PACKAGE
from ..errors import DiscoveryWarning

logger = logging.getLogger(__name__)

PROJECT_GLOB = "*.csproj"


def _local_name(tag: str) -> str:
    # "{http://schemas.microsoft.com/developer/msbuild/2003}PackageReference"
    return tag.rsplit("}", 1)[-1]


def references_package(project_path: Path, package: str = BENCHMARK_PACKAGE) -> bool:
    """Return whether the project declares a PackageReference to ``package``.

    Raises:
        ET.ParseError, OSError: The descriptor cannot be read.
    """
    root = ET.parse(project_path).getroot()  # nosec B314
    wanted = package.casefold()
    for element in root.iter():
        if _local_name(element.tag) != "PackageReference":
            continue
        include = (element.get("Include") or "").strip()
        if include.casefold() == wanted:
            return True
    return False


def discover_benchmark_projects(root: str | Path, package: str = BENCHMARK_PACKAGE) -> list[Path]:
    """Find every project under ``root`` that depends on the benchmarking package.

    Unreadable descriptors are logged as a :class:`DiscoveryWarning` and
    skipped. The result is sorted by path.
    """
    projects: list[Path] = []
    for project_path in sorted(Path(root).rglob(PROJECT_GLOB)):
        if not project_path.is_file():
            continue
        try:
            if references_package(project_path, package):
                projects.append(project_path)
        except (ET.ParseError, OSError) as exc:
            logger.warning("%s", DiscoveryWarning(project_path, str(exc)))
    return projects


__all__ = ["PROJECT_GLOB", "discover_benchmark_projects", "references_package"]
