"""Read a Maven pom.xml into a Model and write rewritten dependencies back."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from depoverride.model.schema import Dependency, Model


class PomError(ValueError):
    """The POM could not be parsed into a model."""

    pass


def _namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag[1:].split("}", 1)[0]
    return ""


def _q(tag: str, ns: str) -> str:
    return f"{{{ns}}}{tag}" if ns else tag


def _local(tag: str) -> str:
    return tag.split("}", 1)[-1]


def _text(el: ET.Element, tag: str, ns: str) -> Optional[str]:
    """Stripped text of a direct child, or None if absent or empty."""
    child = el.find(_q(tag, ns))
    if child is not None and child.text and child.text.strip():
        return child.text.strip()
    return None


def _parse_dependency(dep_el: ET.Element, ns: str) -> Dependency:
    optional = (_text(dep_el, "optional", ns) or "").lower() == "true"
    return Dependency(
        group_id=_text(dep_el, "groupId", ns) or "",
        artifact_id=_text(dep_el, "artifactId", ns) or "",
        version=_text(dep_el, "version", ns),
        scope=_text(dep_el, "scope", ns) or "",
        type=_text(dep_el, "type", ns) or "",
        classifier=_text(dep_el, "classifier", ns) or "",
        optional=optional,
    )


def parse_pom_tree(tree: ET.ElementTree) -> Model:
    """Build a Model from an already parsed POM tree.

    Only ``project/dependencies`` is read; ``dependencyManagement`` is left alone.
    """
    root = tree.getroot()
    if _local(root.tag) != "project":
        raise PomError(f"Expected <project> root element, found <{_local(root.tag)}>")
    ns = _namespace(root)

    parent_el = root.find(_q("parent", ns))
    parent_gid = parent_ver = None
    if parent_el is not None:
        parent_gid = _text(parent_el, "groupId", ns)
        parent_ver = _text(parent_el, "version", ns)

    model = Model(
        group_id=_text(root, "groupId", ns) or parent_gid or "",
        artifact_id=_text(root, "artifactId", ns) or "",
        version=_text(root, "version", ns) or parent_ver or "",
        packaging=_text(root, "packaging", ns) or "jar",
    )

    deps_el = root.find(_q("dependencies", ns))
    if deps_el is not None:
        for dep_el in deps_el.findall(_q("dependency", ns)):
            model.add_dependency(_parse_dependency(dep_el, ns))

    return model


def load_pom(path: Path) -> tuple[Model, ET.ElementTree]:
    """Parse ``path`` into a Model, keeping the tree for ``render_pom``.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        PomError: the file is not well-formed XML or not a POM.
    """
    if not path.exists():
        raise FileNotFoundError(f"POM not found: {path}")

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        tree = ET.parse(path, parser=parser)
    except ET.ParseError as e:
        raise PomError(f"Invalid POM {path}: {e}") from e

    model = parse_pom_tree(tree)
    model.metadata["pom_file"] = str(path)
    return model, tree


def render_pom(tree: ET.ElementTree, model: Model) -> str:
    """Write the model's dependencies into ``tree`` and return the XML text.

    The model's first N dependencies correspond, in order, to the N
    ``<dependency>`` elements the tree was parsed from; any beyond those are
    appended as new elements.
    """
    root = tree.getroot()
    ns = _namespace(root)
    if ns:
        ET.register_namespace("", ns)

    deps_el = root.find(_q("dependencies", ns))
    if deps_el is None:
        deps_el = ET.SubElement(root, _q("dependencies", ns))
    dep_els = deps_el.findall(_q("dependency", ns))

    for i, dependency in enumerate(model.dependencies):
        if i < len(dep_els):
            dep_el = dep_els[i]
        else:
            dep_el = ET.SubElement(deps_el, _q("dependency", ns))
            ET.SubElement(dep_el, _q("groupId", ns)).text = dependency.group_id
            ET.SubElement(dep_el, _q("artifactId", ns)).text = dependency.artifact_id

        if dependency.version is None:
            continue
        version_el = dep_el.find(_q("version", ns))
        if version_el is None:
            version_el = ET.SubElement(dep_el, _q("version", ns))
        version_el.text = dependency.version

    ET.indent(tree, space="    ")
    return ET.tostring(root, encoding="unicode", xml_declaration=True) + "\n"
