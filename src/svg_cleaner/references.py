"""Document roots, id lookup and id-reference rewriting."""

import logging
import re
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from .style import join_style, split_style
from .utils import get_local_name, get_namespace, qualified_name

logger = logging.getLogger(__name__)

# url(#id), url('#id'), url("#id")
URL_REFERENCE_RE = re.compile(r"url\(\s*['\"]?#([^)'\"\s]+)['\"]?\s*\)")


@dataclass
class ElementReference:
    """All places in a document that point at one id."""

    id: str
    locations: list[tuple[ET.Element, str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of referencing attributes."""
        return len(self.locations)


@dataclass
class RewriteResult:
    """Outcome of a reference rewrite."""

    rewritten: int = 0
    removed: int = 0
    unresolved: list[ElementReference] = field(default_factory=list)

    @property
    def has_unresolved(self) -> bool:
        """Check if any reference points at a missing id."""
        return bool(self.unresolved)


def _is_href(name: str) -> bool:
    return get_local_name(name) == "href"


def reference_ids(name: str, value: str) -> list[str]:
    """List the ids referenced by one attribute value.

    Args:
        name: Attribute name (ElementTree notation).
        value: Attribute value.

    Returns:
        Referenced ids in order of appearance, without duplicates. A bare
        '#id' only counts in href attributes, so '#fff' colors are ignored.
    """
    ids = URL_REFERENCE_RE.findall(value)
    if _is_href(name) and value.startswith("#"):
        ids.append(value[1:].strip())
    return list(dict.fromkeys(ids))


def _substitute_urls(
    value: str, mapping: dict[str, str | None]
) -> tuple[str | None, int]:
    """Rewrite url(#id) occurrences of mapped ids inside a value.

    Returns:
        Tuple of (new value or None when a reference was removed, number of
        mapped references found).
    """
    hits = [ref for ref in URL_REFERENCE_RE.findall(value) if ref in mapping]
    if not hits:
        return value, 0
    if any(mapping[ref] is None for ref in hits):
        return None, len(hits)

    def replace(match: re.Match) -> str:
        ref = match.group(1)
        if ref in mapping:
            return f"url(#{mapping[ref]})"
        return match.group(0)

    return URL_REFERENCE_RE.sub(replace, value), len(hits)


class ReferenceResolver:
    """Id and structure queries over one SVG document.

    The parent map and the id index are built on first use. Code that
    modifies the tree behind the resolver's back must call refresh().

    Args:
        root: Root element or element tree of the document.
    """

    def __init__(self, root: ET.Element | ET.ElementTree):
        if isinstance(root, ET.ElementTree):
            root = root.getroot()
        self.root = root
        self._svg: ET.Element | None = None
        self._defs: ET.Element | None = None
        self._parents: dict[ET.Element, ET.Element] | None = None
        self._ids: dict[str, ET.Element] | None = None

    def refresh(self) -> None:
        """Drop cached lookups after external tree modifications."""
        self._svg = None
        self._defs = None
        self._parents = None
        self._ids = None

    @property
    def svg_root(self) -> ET.Element:
        """First svg element in document order.

        Raises:
            ValueError: If the document has no svg element.
        """
        if self._svg is None:
            for elem in self.root.iter():
                if get_local_name(elem.tag) == "svg":
                    self._svg = elem
                    break
            else:
                raise ValueError("Document has no svg element")
        return self._svg

    @property
    def defs_root(self) -> ET.Element:
        """The defs child of the svg element, created as first child if absent."""
        if self._defs is None:
            svg = self.svg_root
            for child in svg:
                if get_local_name(child.tag) == "defs":
                    self._defs = child
                    break
            else:
                namespace = get_namespace(svg.tag)
                tag = f"{{{namespace}}}defs" if namespace else "defs"
                self._defs = ET.Element(tag)
                svg.insert(0, self._defs)
                if self._parents is not None:
                    self._parents[self._defs] = svg
                logger.debug("Created defs element")
        return self._defs

    def _parent_map(self) -> dict[ET.Element, ET.Element]:
        if self._parents is None:
            self._parents = {
                child: parent for parent in self.root.iter() for child in parent
            }
        return self._parents

    def _id_index(self) -> dict[str, ET.Element]:
        if self._ids is None:
            self._ids = {}
            for elem in self.root.iter():
                elem_id = elem.get("id")
                if elem_id is not None:
                    self._ids.setdefault(elem_id, elem)
        return self._ids

    def parent(self, elem: ET.Element) -> ET.Element | None:
        """Parent of an element, or None for the root."""
        return self._parent_map().get(elem)

    def find_by_id(self, elem_id: str) -> ET.Element | None:
        """Find the element carrying an id.

        Args:
            elem_id: Id to look up, without '#'.

        Returns:
            First element in document order with that id, or None.
        """
        return self._id_index().get(elem_id)

    def has_ancestor(self, elem: ET.Element, tag_name: str) -> bool:
        """Check whether any ancestor of elem has the given local tag name."""
        parent = self.parent(elem)
        while parent is not None:
            if get_local_name(parent.tag) == tag_name:
                return True
            parent = self.parent(parent)
        return False

    def attribute(self, elem: ET.Element, name: str) -> str | None:
        """Attribute value, or None when not set.

        Args:
            elem: Element to read.
            name: Attribute name; prefixed names like 'xlink:href' are
                expanded.
        """
        return elem.get(qualified_name(name))

    def collect_references(self) -> dict[str, ElementReference]:
        """Collect every id reference in the document.

        Returns:
            Mapping of referenced id to its ElementReference, in document
            order of first use.
        """
        references: dict[str, ElementReference] = {}
        for elem in self.root.iter():
            for name, value in elem.attrib.items():
                for ref_id in reference_ids(name, value):
                    ref = references.setdefault(ref_id, ElementReference(ref_id))
                    ref.locations.append((elem, name))
        return references

    def unresolved_references(self) -> list[ElementReference]:
        """References whose id matches no element."""
        return [
            ref
            for ref_id, ref in self.collect_references().items()
            if self.find_by_id(ref_id) is None
        ]

    def rewrite_references(self, mapping: dict[str, str | None]) -> RewriteResult:
        """Point references at new ids.

        Args:
            mapping: Old id -> new id. None removes the reference: the
                attribute is deleted, or for 'style' only the declaration
                holding it.

        Returns:
            RewriteResult with counts and the references left unresolved.
        """
        result = RewriteResult()

        for elem in self.root.iter():
            for name, value in list(elem.attrib.items()):
                if _is_href(name) and value.startswith("#"):
                    ref_id = value[1:].strip()
                    if ref_id not in mapping:
                        continue
                    if mapping[ref_id] is None:
                        del elem.attrib[name]
                        result.removed += 1
                    else:
                        elem.set(name, f"#{mapping[ref_id]}")
                        result.rewritten += 1
                    logger.debug("Rewrote %s=%r on <%s>", name, value, elem.tag)
                elif get_local_name(name) == "style":
                    self._rewrite_style(elem, name, value, mapping, result)
                else:
                    new_value, hits = _substitute_urls(value, mapping)
                    if not hits:
                        continue
                    if new_value is None:
                        del elem.attrib[name]
                        result.removed += hits
                    else:
                        elem.set(name, new_value)
                        result.rewritten += hits
                    logger.debug("Rewrote %s=%r on <%s>", name, value, elem.tag)

        result.unresolved = self.unresolved_references()
        for ref in result.unresolved:
            logger.warning(
                "Unresolved reference to #%s (%d attributes)", ref.id, ref.count
            )
        return result

    def _rewrite_style(
        self,
        elem: ET.Element,
        name: str,
        value: str,
        mapping: dict[str, str | None],
        result: RewriteResult,
    ) -> None:
        """Rewrite references inside a style attribute, per declaration."""
        style = split_style(value)
        changed = False
        for key, declaration in list(style.items()):
            new_declaration, hits = _substitute_urls(declaration, mapping)
            if not hits:
                continue
            changed = True
            if new_declaration is None:
                del style[key]
                result.removed += hits
            else:
                style[key] = new_declaration
                result.rewritten += hits

        if not changed:
            return
        if style:
            elem.set(name, join_style(style))
        else:
            del elem.attrib[name]
        logger.debug("Rewrote %s=%r on <%s>", name, value, elem.tag)

    def rename_ids(self, mapping: dict[str, str]) -> RewriteResult:
        """Rename element ids and update every reference to them.

        Args:
            mapping: Old id -> new id.

        Returns:
            RewriteResult of the reference update.

        Raises:
            ValueError: If two ids are mapped to the same new id, or a new
                id is already used by an element that is not renamed itself.
        """
        targets = list(mapping.values())
        duplicates = sorted({new for new in targets if targets.count(new) > 1})
        if duplicates:
            raise ValueError(
                f"Cannot rename several ids to the same id: {', '.join(duplicates)}"
            )

        index = self._id_index()
        renamed = {old: index[old] for old in mapping if old in index}
        for old in mapping:
            if old not in renamed:
                logger.warning("Cannot rename #%s: no element has this id", old)

        moving = {id(elem) for elem in renamed.values()}
        for old, new in mapping.items():
            holder = index.get(new)
            if holder is not None and id(holder) not in moving:
                raise ValueError(f"Cannot rename #{old} to #{new}: id already in use")

        for old in renamed:
            del index[old]
        for old, elem in renamed.items():
            elem.set("id", mapping[old])
            index[mapping[old]] = elem

        return self.rewrite_references(dict(mapping))
