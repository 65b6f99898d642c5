"""DocBook XML output for documented library functions.

Each entry becomes a ``<section>`` whose generated body sits inside the
fallback of an XInclude, so a hand-written override document with the
same identifier replaces it when present. A second XInclude pulls the
entry's source location from a separately generated ``locations.xml``.
"""

from collections.abc import Iterable

from lxml import etree

from nixdoc.exceptions import RenderError
from nixdoc.models import Argument, FlatArgument, ManualEntry, PatternArgument

DOCBOOK_NS = "http://docbook.org/ns/docbook"
XLINK_NS = "http://www.w3.org/1999/xlink"
XI_NS = "http://www.w3.org/2001/XInclude"
XML_ID = "{http://www.w3.org/XML/1998/namespace}id"

DEFAULT_ARG_DOC = "Function argument"
PATTERN_ARG_DOC = "Structured function argument"


def _db(tag: str) -> str:
    return f"{{{DOCBOOK_NS}}}{tag}"


def _xi(tag: str) -> str:
    return f"{{{XI_NS}}}{tag}"


def _element(parent: etree._Element, tag: str, text: str | None = None) -> etree._Element:
    """Append a DocBook element, optionally with text content."""
    element = etree.SubElement(parent, _db(tag))
    if text is not None:
        element.text = text
    return element


def render_docbook(  # noqa: PLR0913
    entries: Iterable[ManualEntry],
    category: str,
    description: str,
    *,
    root_attr: str = "lib",
    overrides_dir: str = "./overrides",
    locations_href: str = "./locations.xml",
) -> str:
    """Render all entries as one DocBook section document.

    Raises:
        RenderError: If comment text contains characters XML cannot carry.
    """
    root = etree.Element(_db("section"), nsmap={None: DOCBOOK_NS, "xlink": XLINK_NS, "xi": XI_NS})
    root.set(XML_ID, f"sec-functions-library-{category}")
    try:
        _element(root, "title", description)
        for entry in entries:
            write_section(root, entry, root_attr=root_attr, overrides_dir=overrides_dir, locations_href=locations_href)
    except ValueError as exc:
        raise RenderError(f"cannot represent documentation as XML: {exc}") from exc
    return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="utf-8").decode("utf-8")


def write_section(
    parent: etree._Element,
    entry: ManualEntry,
    *,
    root_attr: str = "lib",
    overrides_dir: str = "./overrides",
    locations_href: str = "./locations.xml",
) -> etree._Element:
    """Write a single DocBook section for a documented function."""
    title = entry.title(root_attr)
    ident = entry.ident(root_attr)

    section = _element(parent, "section")
    section.set(XML_ID, f"function-library-{ident}")

    _element(_element(section, "title"), "function", title)

    # Hand-written documentation for this function replaces the generated body.
    include = etree.SubElement(section, _xi("include"), href=f"{overrides_dir}/{ident}.xml")
    fallback = etree.SubElement(include, _xi("fallback"))

    if entry.fn_type:
        _element(_element(fallback, "subtitle"), "literal", entry.fn_type)

    for paragraph in entry.description:
        _element(fallback, "para", paragraph)

    if entry.args:
        variablelist = _element(fallback, "variablelist")
        for arg in entry.args:
            write_argument(variablelist, arg)

    if entry.example:
        example = _element(fallback, "example")
        example_title = _element(example, "title")
        _element(example_title, "function", title).tail = " usage example"
        listing = _element(example, "programlisting")
        # CDATA cannot contain its own terminator; plain text is escaped instead.
        listing.text = etree.CDATA(entry.example) if "]]>" not in entry.example else entry.example

    # Location information is generated by a separate tool.
    etree.SubElement(section, _xi("include"), href=locations_href, xpointer=ident)
    return section


def write_argument(variablelist: etree._Element, arg: Argument) -> None:
    """Write a varlistentry for one function argument."""
    entry = _element(variablelist, "varlistentry")
    match arg:
        case FlatArgument(arg=single):
            _element(_element(entry, "term"), "varname", single.name)
            _element(_element(entry, "listitem"), "para", (single.doc or DEFAULT_ARG_DOC).strip())
        case PatternArgument(args=members):
            _element(_element(entry, "term"), "varname", "pattern")
            item = _element(entry, "listitem")
            _element(item, "para", PATTERN_ARG_DOC)
            nested = _element(item, "variablelist")
            for member in members:
                write_argument(nested, FlatArgument(member))
