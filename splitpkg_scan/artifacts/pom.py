"""Read declared dependencies from a Maven pom.xml."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from splitpkg_scan.exceptions import ConfigError
from splitpkg_scan.models import Dependency

logger = logging.getLogger(__name__)

_NS = "{http://maven.apache.org/POM/4.0.0}"

_PROP_RE = re.compile(r"\$\{([^}]+)\}")


def _resolve_props(value: str, props: dict[str, str]) -> str:
    """Replace ${property} placeholders with values from <properties>."""

    def _replace(m: re.Match) -> str:
        return props.get(m.group(1), m.group(0))  # keep original if not found

    return _PROP_RE.sub(_replace, value)


def _text(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.text.strip() if element.text else None


def _local(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


class PomReader:
    """Extract the ``<dependencies>`` section of a POM as :class:`Dependency` objects.

    Versions omitted from a dependency are taken from the POM's own
    ``<dependencyManagement>`` section when present.
    """

    def read(self, pom_path: str | Path) -> list[Dependency]:
        path = Path(pom_path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read POM {path}: {e}") from e
        return self.parse(content, source=str(path))

    def parse(self, content: str, source: str = "pom.xml") -> list[Dependency]:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ConfigError(f"Invalid POM {source}: {e}") from e

        ns = _NS if root.tag.startswith(_NS) else ""
        props = self._extract_properties(root, ns)

        managed: dict[tuple[str, str], str] = {}
        for dep_el in root.findall(f"{ns}dependencyManagement/{ns}dependencies/{ns}dependency"):
            group_id = _text(dep_el.find(f"{ns}groupId"))
            artifact_id = _text(dep_el.find(f"{ns}artifactId"))
            version = _text(dep_el.find(f"{ns}version"))
            if group_id and artifact_id and version:
                managed[(_resolve_props(group_id, props), artifact_id)] = _resolve_props(
                    version, props
                )

        deps: list[Dependency] = []
        for dep_el in root.findall(f"{ns}dependencies/{ns}dependency"):
            group_id = _text(dep_el.find(f"{ns}groupId"))
            artifact_id = _text(dep_el.find(f"{ns}artifactId"))
            if not group_id or not artifact_id:
                logger.warning("Dependency without coordinates in %s, ignoring", source)
                continue
            group_id = _resolve_props(group_id, props)

            version = _text(dep_el.find(f"{ns}version"))
            version = _resolve_props(version, props) if version else managed.get(
                (group_id, artifact_id)
            )
            if not version:
                logger.warning(
                    "No version for %s:%s in %s, ignoring", group_id, artifact_id, source
                )
                continue

            deps.append(
                Dependency(
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=version,
                    scope=_text(dep_el.find(f"{ns}scope")) or "compile",
                    type=_text(dep_el.find(f"{ns}type")) or "jar",
                    classifier=_text(dep_el.find(f"{ns}classifier")),
                )
            )
        return deps

    @staticmethod
    def _extract_properties(root: ET.Element, ns: str) -> dict[str, str]:
        """Collect <properties> plus the project's own coordinates."""
        props: dict[str, str] = {}
        for key in ("groupId", "version"):
            value = _text(root.find(f"{ns}{key}"))
            if value is None:
                value = _text(root.find(f"{ns}parent/{ns}{key}"))
            if value:
                props[f"project.{key}"] = value
        props_el = root.find(f"{ns}properties")
        if props_el is not None:
            for child in props_el:
                if child.text:
                    props[_local(child.tag)] = child.text.strip()
        return props
