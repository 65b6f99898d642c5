"""Syntax-tree based extraction of documented library functions.

Walks every attribute set of a parsed Nix file, keeps the bindings that
carry a doc comment and turns them into ManualEntry records in source
order. Function bindings also get their (curried) argument list.
"""

import re
from collections.abc import Iterator

from nixdoc.comments import parse_doc_comment, retrieve_doc_comment
from nixdoc.exceptions import MissingStructureError
from nixdoc.logging import get_nixdoc_logger
from nixdoc.models import Argument, DocItem, FlatArgument, ManualEntry, PatternArgument, SingleArg
from nixdoc.syntax import Attrpath, AttrpathValue, AttrSet, Dynamic, Ident, IdentParam, Lambda, Pattern, Str, SyntaxNode

logger = get_nixdoc_logger(__name__)

_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n")


def attrpath_name(attrpath: Attrpath) -> str:
    """Join attribute path segments with dots.

    Identifiers contribute their name; string and dynamic segments their
    source text as written (``"foo"``, ``${bar}``). Trivia around the dots
    is dropped.
    """
    segments: list[str] = []
    for attr in attrpath.attrs():
        if (ident := Ident.cast(attr)) is not None:
            segments.append(ident.name)
        elif Str.cast(attr) is not None or Dynamic.cast(attr) is not None:
            segments.append(attr.text.strip())
        else:
            raise MissingStructureError(f"unexpected attribute path segment: {attr.text!r}")
    return ".".join(segments)


def collect_lambda_args(fn: Lambda) -> tuple[Argument, ...]:
    """Collect one argument per curried parameter, outermost first.

    Stops at the first body that is not itself a function literal.
    """
    args: list[Argument] = []
    current: Lambda | None = fn

    while current is not None:
        param = current.param()
        if isinstance(param, IdentParam):
            args.append(FlatArgument(_single_arg(param.ident(), param.syntax)))
        elif isinstance(param, Pattern):
            args.append(PatternArgument(tuple(_single_arg(entry.ident(), entry.syntax) for entry in param.pat_entries())))
        else:
            raise MissingStructureError(f"function literal without parameter: {current.syntax.text[:40]!r}")

        # Curried or not?
        current = Lambda.cast(current.body())

    return tuple(args)


def _single_arg(ident: Ident | None, documented: SyntaxNode) -> SingleArg:
    if ident is None:
        raise MissingStructureError(f"function parameter without identifier: {documented.text!r}")
    return SingleArg(name=ident.name, doc=retrieve_doc_comment(documented))


def retrieve_doc_item(binding: AttrpathValue) -> DocItem | None:
    """Build a DocItem for a binding with a leading doc comment."""
    comment = retrieve_doc_comment(binding.syntax)
    if comment is None:
        return None

    attrpath = binding.attrpath()
    if attrpath is None:
        raise MissingStructureError(f"binding without attribute path: {binding.syntax.text[:40]!r}")

    return DocItem(name=attrpath_name(attrpath), comment=parse_doc_comment(comment))


def collect_entry_information(binding: AttrpathValue) -> DocItem | None:
    """Collect name, doc comment and argument names of one binding.

    Returns None for undocumented bindings.
    """
    item = retrieve_doc_item(binding)
    if item is None:
        return None

    fn = Lambda.cast(binding.value())
    if fn is None:
        return item
    return DocItem(name=item.name, comment=item.comment, args=collect_lambda_args(fn))


def split_paragraphs(doc: str) -> tuple[str, ...]:
    """Split a description on blank lines, dropping empty paragraphs."""
    return tuple(paragraph.strip() for paragraph in _PARAGRAPH_BREAK_RE.split(doc) if paragraph.strip())


def to_manual_entry(item: DocItem, category: str) -> ManualEntry:
    return ManualEntry(
        category=category,
        name=item.name,
        fn_type=item.comment.doc_type,
        description=split_paragraphs(item.comment.doc),
        example=item.comment.example,
        args=item.args,
    )


def iter_bindings(root: SyntaxNode) -> Iterator[AttrpathValue]:
    """Yield the direct bindings of every attribute set, in preorder."""
    for node in root.preorder():
        attr_set = AttrSet.cast(node)
        if attr_set is not None:
            yield from attr_set.entries()


def collect_entries(root: SyntaxNode, category: str) -> list[ManualEntry]:
    """Extract all documented entries of a parsed file in source order."""
    entries: list[ManualEntry] = []
    candidates = 0
    for binding in iter_bindings(root):
        candidates += 1
        item = collect_entry_information(binding)
        if item is None:
            logger.debug("Skipping undocumented binding at offset %d", binding.syntax.offset)
            continue
        entries.append(to_manual_entry(item, category))

    logger.debug("Found %d documented entries among %d bindings", len(entries), candidates)
    return entries
