"""
Module: pipeline

Purpose:
    Orchestrator for template literal minification. Finds templates in a
    source string, decides per template whether to minify it as HTML or
    CSS, runs every eligible template through the strategy concurrently,
    and writes the validated results into an edit buffer.

Key Functions:
    - minify_literals(): Main entry point
    - default_generate_source_map(): Hires map named "<file>.map"

Dependencies:
    - concurrent.futures: Templates are minified on a thread pool
    - minify_literals.strategy: Placeholder protocol and minifiers
    - minify_literals.editing: Edit buffer and source maps

Used By:
    - minify_literals.cli: Command-line wrapper
    - Build tools embedding the library

Design Notes:
    Templates never overlap in the source, so the overwrite ranges of
    different templates are disjoint and can be applied in any order.
    Workers only compute minified parts; the calling thread applies them.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Tuple

from .config import (
    MinifyLiteralsOptions,
    default_should_minify,
    default_should_minify_css,
)
from .editing.buffer import EditBuffer, EditBufferLike
from .editing.sourcemap import SourceMap
from .models import MinifyResult, Template
from .parsing.literals import parse_literals
from .strategy.base import Strategy
from .strategy.default import default_strategy
from .timing import TimingLog, timed_phase
from .validation import Validation, default_validation

logger = logging.getLogger(__name__)

# Escape hatch helpers whose output must never be minified
UNSAFE_CSS_MARKER = "unsafeCSS"
UNSAFE_HTML_MARKER = "unsafeHTML"


def default_generate_source_map(buffer: EditBufferLike, file_name: str) -> SourceMap:
    """
    Generate a hires source map named ``<file_name>.map`` for ``file_name``.

    Args:
        buffer: Edit buffer holding the minified overwrites.
        file_name: Name or path of the source file.

    Returns:
        v3 SourceMap.
    """
    return buffer.generate_map(
        file=f"{file_name}.map",
        source=file_name,
        hires=True,
    )


def _template_id(template: Template) -> str:
    return f"{template.tag or 'template'}@{template.parts[0].start}"


def _resolve_validation(options: MinifyLiteralsOptions) -> Optional[Validation]:
    if options.validate is False:
        return None
    if isinstance(options.validate, Validation):
        return options.validate
    return default_validation


def _minify_css(strategy: Strategy, combined: str, css_option: Any) -> str:
    if callable(css_option):
        return css_option(combined)
    if css_option is False:
        return combined
    css_options = css_option if isinstance(css_option, Mapping) else None
    return strategy.minify_css(combined, css_options)


def _minify_template(
    template: Template,
    *,
    as_css: bool,
    strategy: Strategy,
    validation: Optional[Validation],
    minify_options: Mapping[str, Any],
    timing: TimingLog,
) -> List[str]:
    """Run one template through the placeholder protocol."""
    template_id = _template_id(template)
    with timed_phase(timing, "css" if as_css else "html", template_id):
        placeholder = strategy.get_placeholder(template.parts, template.tag)
        if validation:
            validation.ensure_placeholder_valid(placeholder)

        combined = strategy.combine_html_strings(template.parts, placeholder)
        if as_css:
            minified = _minify_css(strategy, combined, minify_options.get("minify_css"))
        else:
            minified = strategy.minify_html(combined, minify_options)

        min_parts = strategy.split_html_by_placeholder(minified, placeholder)
        if validation:
            validation.ensure_html_parts_valid(template.parts, min_parts)

    logger.debug(
        f"Minified {template_id} ({len(template.parts)} parts) "
        f"in {timing.get_template_total(template_id):.3f}s"
    )
    return min_parts


def minify_literals(
    source: str,
    options: Optional[MinifyLiteralsOptions] = None,
) -> Optional[MinifyResult]:
    """
    Minify all HTML and CSS template literals in a source string.

    Pipeline:
    1. Parse template literals from the source
    2. Check for unsafeHTML()/unsafeCSS() escape hatches
    3. Minify every eligible template concurrently
    4. Overwrite each non-empty template part in the edit buffer
    5. Generate the source map

    Args:
        source: Source code.
        options: Minification options.

    Returns:
        MinifyResult with the minified code and optional source map, or
        None if nothing changed.

    Raises:
        ProtocolViolationError: If a strategy broke the placeholder protocol.
        CSSMinifyError: If the CSS minifier reported errors.
        LiteralParseError: If the source could not be scanned.

    Example:
        >>> source = "html`<ul>  <li>${x}</li>  </ul>`"
        >>> minify_literals(source, MinifyLiteralsOptions(file_name="a.js")).code
        'html`<ul><li>${x}</li></ul>`'
    """
    options = options or MinifyLiteralsOptions()
    parse = options.parse_literals or parse_literals
    should_minify = options.should_minify or default_should_minify
    should_minify_css = options.should_minify_css or default_should_minify_css
    strategy = options.strategy or default_strategy
    minify_options = options.resolved_minify_options()
    validation = _resolve_validation(options)
    file_name = options.file_name
    timing = TimingLog()

    with timed_phase(timing, "parse"):
        templates = parse(source, file_name, **options.parse_literals_options)

    skip_css = False
    skip_html = False
    if strategy.supports_css and UNSAFE_CSS_MARKER in source:
        logger.warning(
            f"{UNSAFE_CSS_MARKER}() detected in {file_name or 'source'}. "
            "CSS minification will not be performed for this file."
        )
        skip_css = True
    if UNSAFE_HTML_MARKER in source:
        logger.warning(
            f"{UNSAFE_HTML_MARKER}() detected in {file_name or 'source'}. "
            "HTML minification will not be performed for this file."
        )
        skip_html = True

    jobs: List[Tuple[Template, bool]] = []
    for template in templates:
        as_html = not skip_html and should_minify(template)
        as_css = not skip_css and strategy.supports_css and should_minify_css(template)
        if as_html or as_css:
            jobs.append((template, as_css))

    buffer = (options.edit_buffer or EditBuffer)(source)

    if jobs:
        with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
            futures: List[Tuple[Template, Future]] = [
                (
                    template,
                    executor.submit(
                        _minify_template,
                        template,
                        as_css=as_css,
                        strategy=strategy,
                        validation=validation,
                        minify_options=minify_options,
                        timing=timing,
                    ),
                )
                for template, as_css in jobs
            ]
            for template, future in futures:
                min_parts = future.result()
                for index, part in enumerate(template.parts):
                    # Adjacent expressions leave zero-length parts
                    if part.start < part.end:
                        min_part = min_parts[index] if index < len(min_parts) else ""
                        buffer.overwrite(part.start, part.end, min_part)

    code = buffer.to_string()
    logger.debug(timing.summary())

    if code == source:
        logger.debug(f"No changes to {file_name or 'source'} ({len(jobs)} template(s) checked)")
        return None

    source_map = None
    if options.generate_source_map is not False:
        generate = options.generate_source_map
        if not callable(generate):
            generate = default_generate_source_map
        with timed_phase(timing, "source_map"):
            source_map = generate(buffer, file_name)

    logger.info(f"Minified {len(jobs)} template literal(s) in {file_name or 'source'}")
    return MinifyResult(code=code, map=source_map)
