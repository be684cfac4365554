"""Removal of legacy source-control bindings from descriptor files.

Project files (MSBuild XML) carry the binding in four elements,
``SccProjectName``, ``SccLocalPath``, ``SccAuxPath`` and ``SccProvider``.
Solution files carry it in a
``GlobalSection(TeamFoundationVersionControl)`` block. Both strippers
rewrite the file only when something was found, so running them on a
clean file leaves it byte-identical.
"""

import logging
import os
import re
import shutil
import xml.etree.ElementTree as ET
from codecs import BOM_UTF8
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile

from treescrub.cleaner.attributes import FileAttributes, OsFileAttributes
from treescrub.cleaner.errors import DescriptorParseError, DescriptorWriteError, EntryAccessError

logger = logging.getLogger(__name__)

BINDING_ELEMENT_NAMES: frozenset[str] = frozenset(
    {
        "SccProjectName",
        "SccLocalPath",
        "SccAuxPath",
        "SccProvider",
    }
)

# Leading whitespace is part of the match so the section's own line goes too.
SOLUTION_BINDING_SECTION = re.compile(
    r"\s+GlobalSection\(TeamFoundationVersionControl\).+?EndGlobalSection",
    re.DOTALL,
)

_XML_DECLARATION = re.compile(rb"^<\?xml[^>]*\?>[ \t]*(?:\r\n|\n)?")
_DECLARED_ENCODING = re.compile(rb"""encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")
_TRAILING_WHITESPACE = re.compile(rb"\s*$")
# Comments, processing instructions and whitespace before the root element.
_PROLOG = re.compile(rb"(?:\s|<!--.*?-->|<\?.*?\?>)*", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ElementMatch:
    """A binding element and the parent it must be detached from."""

    parent: ET.Element
    element: ET.Element

    @property
    def name(self) -> str:
        return local_name(self.element.tag)


@dataclass(frozen=True, slots=True)
class SectionMatch:
    """Character span of a binding section inside a solution file."""

    start: int
    end: int


def local_name(tag: object) -> str:
    """Return an element tag without its ``{namespace}`` prefix.

    Comments and processing instructions have a non-string tag and map to
    an empty name.
    """
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def namespace_of(tag: object) -> str | None:
    """Return the namespace URI of a tag, or None if it is not qualified."""
    if isinstance(tag, str) and tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def find_project_bindings(root: ET.Element) -> list[ElementMatch]:
    """Find binding elements anywhere below the document root.

    Elements are matched by local name, so documents with and without
    the MSBuild default namespace give the same result.

    Args:
        root: Parsed document root.

    Returns:
        Matches in document order.
    """
    found: list[ElementMatch] = []
    for parent in root.iter():
        for child in parent:
            if local_name(child.tag) in BINDING_ELEMENT_NAMES:
                found.append(ElementMatch(parent=parent, element=child))
    return found


def find_solution_binding(text: str) -> SectionMatch | None:
    """Locate the first version-control global section in solution text.

    Args:
        text: Full contents of the solution file.

    Returns:
        Span of the section including the whitespace before it, or None.
    """
    match = SOLUTION_BINDING_SECTION.search(text)
    if match is None:
        return None
    return SectionMatch(start=match.start(), end=match.end())


def remove_element(parent: ET.Element, element: ET.Element) -> None:
    """Detach an element, keeping the indentation of what follows it.

    When the last child is removed, its tail (the indentation of the
    parent's closing tag) moves to the previous sibling, or to the
    parent's text if nothing is left.
    """
    children = list(parent)
    index = children.index(element)
    if index == len(children) - 1:
        if index > 0:
            children[index - 1].tail = element.tail
        else:
            parent.text = element.tail
    parent.remove(element)


class BindingStripper:
    """Rewrites project and solution files without source-control bindings.

    Read-only files are made writable before being rewritten.

    Attributes:
        _dry_run: Count matches without writing anything.
        _attributes: Read-only attribute implementation.
    """

    def __init__(
        self,
        *,
        dry_run: bool = False,
        attributes: FileAttributes | None = None,
    ) -> None:
        self._dry_run = dry_run
        self._attributes = attributes or OsFileAttributes()

    def strip_project_file(self, path: Path) -> int:
        """Remove binding elements from an MSBuild project file.

        Args:
            path: Project file to clean.

        Returns:
            Number of elements removed (or, in dry-run, found). Zero means
            the file was not touched.

        Raises:
            EntryAccessError: If the file cannot be read or made writable.
            DescriptorParseError: If the file is not well-formed XML.
            DescriptorWriteError: If the cleaned document cannot be written.
        """
        data = self._read(path)

        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
        try:
            parser.feed(data)
            root = parser.close()
        except ET.ParseError as e:
            raise DescriptorParseError(path, f"Invalid XML: {e}") from e
        except (LookupError, ValueError) as e:
            # expat rejects an unknown declared encoding before parsing starts
            raise DescriptorParseError(path, f"Unreadable XML: {e}") from e

        found = find_project_bindings(root)
        if not found:
            logger.debug("No source control bindings in %s", path)
            return 0

        if self._dry_run:
            logger.info("Dry-run: would remove %d binding element(s) from %s", len(found), path)
            return len(found)

        for match in found:
            remove_element(match.parent, match.element)

        self._write(path, _serialize_project(root, data))
        logger.info("Removed %d binding element(s) from %s", len(found), path)
        return len(found)

    def strip_solution_file(self, path: Path) -> bool:
        """Remove the version-control global section from a solution file.

        The rest of the file, including its byte order mark, line endings
        and any bytes that are not valid UTF-8, is written back unchanged.

        Args:
            path: Solution file to clean.

        Returns:
            True if a section was removed (or, in dry-run, found).

        Raises:
            EntryAccessError: If the file cannot be read or made writable.
            DescriptorWriteError: If the cleaned file cannot be written.
        """
        data = self._read(path)
        bom = BOM_UTF8 if data.startswith(BOM_UTF8) else b""
        text = data[len(bom) :].decode("utf-8", errors="surrogateescape")

        section = find_solution_binding(text)
        if section is None:
            logger.debug("No source control section in %s", path)
            return False

        if self._dry_run:
            logger.info("Dry-run: would remove source control section from %s", path)
            return True

        cleaned = text[: section.start] + text[section.end :]
        self._write(path, bom + cleaned.encode("utf-8", errors="surrogateescape"))
        logger.info("Removed source control section from %s", path)
        return True

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise EntryAccessError(path, str(e)) from e

    def _write(self, path: Path, data: bytes) -> None:
        """Replace the file contents atomically.

        The new contents go to a temporary file in the same directory,
        which takes the original's permissions and is then renamed over
        it, so a failed write leaves the original untouched.
        """
        try:
            if self._attributes.is_read_only(path):
                self._attributes.clear_read_only(path)
        except OSError as e:
            raise EntryAccessError(path, f"Cannot make writable: {e}") from e

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(data)
            shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise DescriptorWriteError(path, str(e)) from e


def _serialize_project(root: ET.Element, original: bytes) -> bytes:
    """Serialize a cleaned project document in the style of the original.

    Keeps the original byte order mark, XML declaration, the comments
    and processing instructions before the root element, line ending
    convention, trailing whitespace and default namespace. Anything after
    the root element other than whitespace is not kept.
    """
    namespace = namespace_of(root.tag)
    if namespace is not None:
        ET.register_namespace("", namespace)

    bom = BOM_UTF8 if original.startswith(BOM_UTF8) else b""
    content = original[len(bom) :]

    declaration = b""
    encoding = "utf-8"
    match = _XML_DECLARATION.match(content)
    if match is not None:
        declaration = match.group(0)
        declared = _DECLARED_ENCODING.search(declaration)
        if declared is not None:
            encoding = declared.group(1).decode("ascii")

    prolog = _PROLOG.match(content, len(declaration))
    head = declaration + (prolog.group(0) if prolog is not None else b"")

    root.tail = None
    body = ET.tostring(root, encoding="unicode")
    if b"\r\n" in content:
        body = body.replace("\n", "\r\n")

    trailing = _TRAILING_WHITESPACE.search(content)
    tail = trailing.group(0) if trailing is not None else b""

    try:
        encoded = body.encode(encoding, errors="xmlcharrefreplace")
    except LookupError:
        encoded = body.encode("utf-8")

    return bom + head + encoded + tail
