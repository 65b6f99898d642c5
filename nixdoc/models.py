"""Documentation data model shared by the extractor and both renderers.

Everything here is immutable once built. A ManualEntry owns its
arguments; nothing is shared between entries.
"""

import re
from dataclasses import dataclass

_ANCHOR_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.\-]+")


@dataclass(frozen=True)
class SingleArg:
    """A function argument name and its (optional) doc comment."""

    name: str
    doc: str | None = None


@dataclass(frozen=True)
class FlatArgument:
    """Flat function argument, e.g. ``n: n * 2``."""

    arg: SingleArg


@dataclass(frozen=True)
class PatternArgument:
    """Pattern function argument, e.g. ``{ name, age }: ...``.

    Members keep declaration order.
    """

    args: tuple[SingleArg, ...] = ()


Argument = FlatArgument | PatternArgument


@dataclass(frozen=True)
class DocComment:
    """A doc comment split into its sections."""

    doc: str
    doc_type: str | None = None  # not checked against the code in any way
    example: str | None = None


@dataclass(frozen=True)
class DocItem:
    """A documented binding before it is placed in a category."""

    name: str
    comment: DocComment
    args: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class ManualEntry:
    """A single manual section describing a library function."""

    category: str
    name: str
    fn_type: str | None
    description: tuple[str, ...]
    example: str | None
    args: tuple[Argument, ...] = ()

    def title(self, root_attr: str = "lib") -> str:
        """Fully-qualified name shown to readers, e.g. ``lib.strings.foo'``."""
        return f"{root_attr}.{self.category}.{self.name}"

    def ident(self, root_attr: str = "lib") -> str:
        """Anchor-safe identifier for XML ids and Markdown anchors.

        Quotes become ``-prime``; any other run of characters outside
        ``[A-Za-z0-9_.-]`` (from string or dynamic attribute names) becomes ``-``.
        """
        name = _ANCHOR_UNSAFE_RE.sub("-", self.name.replace("'", "-prime"))
        return f"{root_attr}.{self.category}.{name}"
