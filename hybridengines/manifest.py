"""Minimal config.xml model: read and edit the <engine> entries of a widget."""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

_logging = logging.getLogger(__name__)

# ElementTree generates these prefixes itself and refuses to register them
_RESERVED_PREFIX = re.compile(r"ns\d+$")


@dataclass
class DeclaredEngineRef:
    """One <engine> entry of config.xml."""
    name: str | None
    spec: str | None


class ManifestError(Exception):
    """Raised when config.xml cannot be read, parsed or written."""
    pass


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _declared_namespaces(path: Path) -> list[tuple[str, str]]:
    return [ns for _, ns in ET.iterparse(path, events=("start-ns",))]


def _register_namespaces(namespaces: list[tuple[str, str]]) -> None:
    # Keep the document's own prefixes on write instead of ns0, ns1, ...
    for prefix, uri in namespaces:
        if _RESERVED_PREFIX.match(prefix):
            continue
        try:
            ET.register_namespace(prefix, uri)
        except ValueError as e:
            raise ManifestError(f"Cannot keep namespace prefix {prefix!r}: {e}") from e


class Widget:
    """The root <widget> element of a config.xml document."""

    def __init__(self, root: ET.Element):
        self._root = root
        ns = root.tag[1:].split("}", 1)[0] if root.tag.startswith("{") else None
        self._engine_tag = f"{{{ns}}}engine" if ns else "engine"

    @property
    def id(self) -> str | None:
        return self._root.get("id")

    @property
    def name(self) -> str | None:
        for child in self._root:
            if _local_name(child.tag) == "name":
                return (child.text or "").strip() or None
        return None

    def _engine_elements(self) -> list[ET.Element]:
        return [c for c in self._root if _local_name(c.tag) == "engine"]

    def get_engines(self) -> list[DeclaredEngineRef]:
        return [
            DeclaredEngineRef(name=e.get("name"), spec=e.get("spec"))
            for e in self._engine_elements()
        ]

    def add_engine(self, ref: DeclaredEngineRef) -> None:
        element = ET.Element(self._engine_tag)
        if ref.name is not None:
            element.set("name", ref.name)
        if ref.spec is not None:
            element.set("spec", ref.spec)

        children = list(self._root)
        if children:
            # Reuse the surrounding indentation
            element.tail = children[-1].tail
            children[-1].tail = self._root.text
        self._root.append(element)

    def remove_engine(self, ref: DeclaredEngineRef) -> bool:
        """Remove the first <engine> with the same name and spec."""
        for element in self._engine_elements():
            if element.get("name") == ref.name and element.get("spec") == ref.spec:
                self._root.remove(element)
                return True
        return False


class WidgetModel:
    """Access to a project's config.xml.

    Reads always parse the file afresh. An edit widget is kept until
    :meth:`save` or :meth:`forget` so several edits land in one write.
    """

    _models: dict[Path, "WidgetModel"] = {}

    def __init__(self, path: Path):
        self.path = path
        self._edit_tree: ET.ElementTree | None = None
        self._namespaces: list[tuple[str, str]] = []

    @classmethod
    def for_project(cls, project) -> "WidgetModel":
        path = project.get_config_xml_file()
        key = path.resolve()
        model = cls._models.get(key)
        if model is None:
            model = cls(path)
            cls._models[key] = model
        return model

    @classmethod
    def forget(cls, project) -> None:
        cls._models.pop(project.get_config_xml_file().resolve(), None)

    def _parse(self, with_namespaces: bool = False) -> ET.ElementTree:
        try:
            tree = ET.parse(self.path)
            if with_namespaces:
                self._namespaces = _declared_namespaces(self.path)
        except ET.ParseError as e:
            raise ManifestError(f"{self.path.name} is not well-formed: {e}") from e
        except OSError as e:
            raise ManifestError(f"Cannot read {self.path}: {e}") from e

        if _local_name(tree.getroot().tag) != "widget":
            raise ManifestError(f"{self.path.name} has no <widget> root element")
        return tree

    def get_widget_for_read(self) -> Widget | None:
        """Widget for reading, or None when the project has no config.xml."""
        if not self.path.exists():
            return None
        return Widget(self._parse().getroot())

    def get_widget_for_edit(self) -> Widget:
        if self._edit_tree is None:
            if not self.path.exists():
                raise ManifestError(f"{self.path} does not exist")
            self._edit_tree = self._parse(with_namespaces=True)
        return Widget(self._edit_tree.getroot())

    def create_engine(self, name: str, spec: str) -> DeclaredEngineRef:
        return DeclaredEngineRef(name=name, spec=spec)

    def discard(self) -> None:
        """Drop pending edits without writing them."""
        self._edit_tree = None
        self._namespaces = []

    def save(self) -> None:
        if self._edit_tree is None:
            return
        try:
            _register_namespaces(self._namespaces)
            self._edit_tree.write(self.path, encoding="utf-8", xml_declaration=True)
        except OSError as e:
            raise ManifestError(f"Cannot write {self.path}: {e}") from e
        finally:
            self.discard()
        _logging.debug(f"Saved {self.path}")


__all__ = [
    "DeclaredEngineRef",
    "ManifestError",
    "Widget",
    "WidgetModel",
]
