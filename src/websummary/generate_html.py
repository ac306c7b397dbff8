"""Splice a rendered summary into the all-in-one HTML page shell.

The shell is an HTML template with four substitution tokens:

| Token                                    | Replaced with               |
| ---------------------------------------- | --------------------------- |
| ``[[ tenx-websummary-script.min.js ]]``  | the client bundle           |
| ``[[ tenx-websummary-styles.min.css ]]`` | the stylesheet              |
| ``[[ data.js ]]``                        | the document JSON           |
| ``[[ summary.html ]]``                   | the rendered summary HTML   |

Before substitution, ``[[ include path/to/file.html ]]`` directives in the
summary HTML are expanded from the template directory, repeatedly, so
included files may themselves include others (at most
``MAX_INCLUDE_EXPANSIONS`` expansions).

Example::

    build_files = WebSummaryBuildFiles.from_dir("dist/")
    with open("summary.html", "w") as out:
        generate_html_summary(json_data, summary_html, TemplateInfo.default(), out, build_files)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from websummary.errors import TemplateIncludeError

__all__ = [
    "DEFAULT_TEMPLATE",
    "INCLUDE_RE",
    "MAX_INCLUDE_EXPANSIONS",
    "TemplateInfo",
    "WebSummaryBuildFiles",
    "expand_includes",
    "fill_template",
    "generate_html_summary",
]

logger = logging.getLogger(__name__)

SCRIPT_TOKEN = "[[ tenx-websummary-script.min.js ]]"
STYLES_TOKEN = "[[ tenx-websummary-styles.min.css ]]"
DATA_TOKEN = "[[ data.js ]]"
SUMMARY_TOKEN = "[[ summary.html ]]"

INCLUDE_RE = re.compile(r"\[\[ include (?P<filename>[a-zA-Z./_\d-]+) \]\]")
MAX_INCLUDE_EXPANSIONS = 100

SCRIPT_FILE = "tenx-websummary-script.min.js"
STYLES_FILE = "tenx-websummary-styles.min.css"
TEMPLATE_FILE = "template.html"

# The data line must stay on a line of its own: scrape_json reads it back.
DEFAULT_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <style>
[[ tenx-websummary-styles.min.css ]]
    </style>
  </head>
  <body>
[[ summary.html ]]
    <script>
      const data = [[ data.js ]]
    </script>
    <script>
[[ tenx-websummary-script.min.js ]]
    </script>
  </body>
</html>
"""


@dataclass(frozen=True, slots=True)
class WebSummaryBuildFiles:
    """The compiled client bundle, its stylesheet and the page shell."""

    script_js: str
    styles_css: str
    template_html: str = DEFAULT_TEMPLATE

    @classmethod
    def from_dir(cls, directory: str | Path) -> WebSummaryBuildFiles:
        """Load the build artifacts from a directory.

        ``template.html`` is optional; the bundled shell is used without it.

        Raises:
            OSError: If the script or stylesheet cannot be read.
        """
        directory = Path(directory)
        template = directory / TEMPLATE_FILE
        return cls(
            script_js=(directory / SCRIPT_FILE).read_text(encoding="utf-8"),
            styles_css=(directory / STYLES_FILE).read_text(encoding="utf-8"),
            template_html=(
                template.read_text(encoding="utf-8")
                if template.exists()
                else DEFAULT_TEMPLATE
            ),
        )


@dataclass(frozen=True, slots=True)
class TemplateInfo:
    """Where the page shell comes from.

    - ``TemplateInfo.default()``: the shell in the build files
    - ``TemplateInfo.dynamic(dir)``: ``dir/template.html`` if it exists,
      otherwise the build files' shell; ``dir`` also serves includes
    - ``TemplateInfo.static(source)``: the given shell source
    """

    directory: Path | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        if self.directory is not None and self.source is not None:
            msg = "TemplateInfo takes a directory or a source, not both"
            raise ValueError(msg)

    @classmethod
    def default(cls) -> TemplateInfo:
        return cls()

    @classmethod
    def dynamic(cls, directory: str | Path) -> TemplateInfo:
        return cls(directory=Path(directory))

    @classmethod
    def static(cls, source: str) -> TemplateInfo:
        return cls(source=source)

    def load(self, build_files: WebSummaryBuildFiles) -> str:
        if self.source is not None:
            return self.source
        if self.directory is not None:
            template = self.directory / TEMPLATE_FILE
            if template.exists():
                return template.read_text(encoding="utf-8")
        return build_files.template_html


def expand_includes(summary_html: str, template_dir: Path | None) -> str:
    """Expand ``[[ include file ]]`` directives until none are left.

    Every occurrence of a directive is replaced with the file's contents in
    one step; included contents are scanned again.

    Raises:
        TemplateIncludeError: If a directive is found without a template
            directory, a file cannot be read, or more than
            ``MAX_INCLUDE_EXPANSIONS`` expansions are needed.
    """
    expansions = 0
    while (match := INCLUDE_RE.search(summary_html)) is not None:
        directive = match.group(0)
        if template_dir is None:
            msg = f"found replacement {directive} but template_dir is None"
            raise TemplateIncludeError(msg)
        if expansions >= MAX_INCLUDE_EXPANSIONS:
            msg = "Maximum recursion depth exceeded!"
            raise TemplateIncludeError(msg)
        path = template_dir / match.group("filename")
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot include {path}: {e}"
            raise TemplateIncludeError(msg) from e
        logger.debug("Expanding %s from %s", directive, path)
        summary_html = summary_html.replace(directive, contents)
        expansions += 1
    return summary_html


def fill_template(
    template_src: str,
    *,
    json_data: str,
    summary_html: str,
    build_files: WebSummaryBuildFiles,
) -> str:
    """Substitute the four tokens, in order, into ``template_src``."""
    for token, replacement in (
        (SCRIPT_TOKEN, build_files.script_js),
        (STYLES_TOKEN, build_files.styles_css),
        (DATA_TOKEN, json_data),
        (SUMMARY_TOKEN, summary_html),
    ):
        template_src = template_src.replace(token, replacement)
    return template_src


def generate_html_summary(
    json_data: str,
    summary_html: str,
    template_info: TemplateInfo,
    writer: TextIO,
    build_files: WebSummaryBuildFiles,
) -> None:
    """Write the all-in-one HTML page to ``writer``.

    Args:
        json_data:     The document JSON, serialized on a single line.
        summary_html:  The rendered summary fragment, before include expansion.
        template_info: Where the page shell and includes come from.
        writer:        Text stream receiving the page.
        build_files:   Client bundle, stylesheet and fallback shell.

    Raises:
        TemplateIncludeError: If an include directive cannot be expanded.
        OSError: If the shell cannot be read from the template directory.
    """
    template_src = template_info.load(build_files)
    summary_html = expand_includes(summary_html, template_info.directory)
    writer.write(
        fill_template(
            template_src,
            json_data=json_data,
            summary_html=summary_html,
            build_files=build_files,
        )
    )
