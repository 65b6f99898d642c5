"""Validated options of a single documentation run."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from nixdoc.exceptions import OptionsError
from nixdoc.settings import OutputFormat


class DocsOptions(BaseModel):
    """What to document and how.

    Attributes:
        file: Nix file to process.
        category: Function category (e.g. 'strings', 'attrsets'); namespaces
                  every generated anchor and identifier.
        description: Heading text of the generated document, used verbatim.
        output_format: Renderer to use.
    """

    model_config = ConfigDict(frozen=True)

    file: Path
    category: str
    description: str
    output_format: OutputFormat = "commonmark"

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Category ends up inside ids, so it must be a single non-empty word."""
        if not v or any(c.isspace() for c in v):
            raise ValueError(f"category must be a non-empty name without whitespace: {v!r}")
        if "'" in v:
            raise ValueError(f"category cannot contain quotes: {v!r}")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description cannot be empty")
        return v


def build_options(**values: Any) -> DocsOptions:
    """Validate raw option values.

    Raises:
        OptionsError: If any value is invalid.
    """
    try:
        return DocsOptions(**values)
    except ValidationError as exc:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
        raise OptionsError(f"invalid options: {problems}") from exc
