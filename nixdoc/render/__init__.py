"""Output backends.

Each renderer is a pure function from an ordered sequence of ManualEntry
to the text of one document; they share no state.
"""

from nixdoc.render.commonmark import render_commonmark
from nixdoc.render.docbook import render_docbook

__all__ = [
    "render_commonmark",
    "render_docbook",
]
