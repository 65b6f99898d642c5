"""CommonMark output for documented library functions.

The output targets the nixpkgs manual's Markdown dialect: heading anchors
use ``{#id}`` attributes, arguments are definition lists and examples are
``:::`` admonition containers.
"""

import re
import textwrap
from collections.abc import Iterable

from nixdoc.models import Argument, FlatArgument, ManualEntry, PatternArgument

DEFAULT_ARG_DOC = "Function argument"

_BACKTICK_RUN_RE = re.compile(r"`+")


def render_commonmark(
    entries: Iterable[ManualEntry],
    category: str,
    description: str,
    *,
    root_attr: str = "lib",
) -> str:
    """Render a category heading followed by one section per entry."""
    parts: list[str] = [f"# {description} {{#sec-functions-library-{category}}}", ""]
    for entry in entries:
        parts.extend(render_section(entry, root_attr))
    return "\n".join(parts)


def render_section(entry: ManualEntry, root_attr: str = "lib") -> list[str]:
    title = entry.title(root_attr)
    ident = entry.ident(root_attr)

    parts: list[str] = [f"## {inline_code(title)} {{#function-library-{ident}}}", ""]

    if entry.fn_type:
        parts.extend([inline_code(entry.fn_type), ""])

    for paragraph in entry.description:
        parts.extend([paragraph, ""])

    parts.extend(format_argument(arg) for arg in entry.args)

    if entry.example:
        code = entry.example.strip()
        fence = _fence_for(code)
        parts.extend([
            f"::: {{.example #function-library-example-{ident}}}",
            f"# {inline_code(title)} usage example",
            "",
            f"{fence}nix",
            code,
            fence,
            ":::",
            "",
        ])

    return parts


def format_argument(arg: Argument) -> str:
    """Render one argument as a definition list item, blank line included."""
    match arg:
        case FlatArgument(arg=single):
            doc = (single.doc or DEFAULT_ARG_DOC).strip()
            return f"{inline_code(single.name)}\n\n: {_indent_continuation(doc)}\n"
        case PatternArgument(args=members):
            inner = "\n".join(format_argument(FlatArgument(member)) for member in members)
            nested = textwrap.indent(inner, "    ").lstrip()
            return f"structured function argument\n\n: {nested}" if nested else "structured function argument\n"
    raise TypeError(f"unsupported argument {arg!r}")


def inline_code(text: str) -> str:
    """Wrap text in a code span that its own backticks cannot close."""
    fence = "`" * (_longest_backtick_run(text) + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{fence}{text}{fence}"


def _fence_for(code: str) -> str:
    return "`" * max(3, _longest_backtick_run(code) + 1)


def _longest_backtick_run(text: str) -> int:
    return max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)


def _indent_continuation(doc: str) -> str:
    """Keep continuation lines of a definition inside the list item."""
    first, sep, rest = doc.partition("\n")
    if not sep:
        return doc
    return f"{first}\n{textwrap.indent(rest, '  ')}"
