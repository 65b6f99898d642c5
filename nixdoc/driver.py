"""Pipeline driver: source text in, rendered document out."""

from nixdoc.extractor import collect_entries
from nixdoc.logging import get_nixdoc_logger
from nixdoc.options import DocsOptions
from nixdoc.render import render_commonmark, render_docbook
from nixdoc.settings import OutputFormat, Settings, settings
from nixdoc.syntax import parse

logger = get_nixdoc_logger(__name__)


def generate_document(
    source: str,
    category: str,
    description: str,
    output_format: OutputFormat = "commonmark",
    *,
    config: Settings = settings,
) -> str:
    """Parse Nix source and render every documented binding.

    Raises:
        NixParseError: If the source does not parse; nothing is rendered.
        MissingStructureError: On an unexpected tree shape.
        RenderError: If the output format cannot carry the documentation.
    """
    root = parse(source)
    entries = collect_entries(root, category)
    logger.debug("Rendering %d entries of category %s as %s", len(entries), category, output_format)

    if output_format == "docbook":
        return render_docbook(
            entries,
            category,
            description,
            root_attr=config.root_attr,
            overrides_dir=config.overrides_dir,
            locations_href=config.locations_href,
        )
    return render_commonmark(entries, category, description, root_attr=config.root_attr)


def document_file(options: DocsOptions, *, config: Settings = settings) -> str:
    """Read ``options.file`` and render it. I/O errors propagate."""
    source = options.file.read_text(encoding="utf-8")
    logger.debug("Read %s (%d characters)", options.file, len(source))
    return generate_document(source, options.category, options.description, options.output_format, config=config)
