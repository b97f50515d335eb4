"""
Compilation entry point: validate, generate CSS, build the AI manifest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .css_generator import compile_system
from .ir import AIManifest, DesignSystemConfig, Severity, ValidationIssue
from .manifest import generate_ai_manifest
from .validator import validate_schema

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Output of compile_design_system."""

    success: bool
    css: str
    manifest: AIManifest
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def format_issue(issue: ValidationIssue) -> str:
    """``[CODE] message (path)``"""
    return f"[{issue.code}] {issue.message} ({issue.path})"


def compile_design_system(
    config: DesignSystemConfig,
    minify: bool = False,
    css_prefix: str | None = None,
    strict: bool | None = None,
) -> CompileResult:
    """
    Validate and compile a design system.

    Args:
        config: Design system
        minify: Minify the stylesheet
        css_prefix: Override the system's CSS prefix
        strict: On an invalid schema, stop before generating CSS; defaults
            to the system's ``strictMode`` setting

    Returns:
        CompileResult; ``success`` is false when any schema error was found
    """
    if strict is None:
        strict = config.settings.strict_mode

    validation = validate_schema(config, strict=strict)
    errors = [format_issue(i) for i in validation.issues if i.severity == Severity.ERROR]
    warnings = [format_issue(i) for i in validation.issues if i.severity == Severity.WARNING]

    if css_prefix:
        config = config.model_copy(
            update={"settings": config.settings.model_copy(update={"css_prefix": css_prefix})}
        )

    if strict and not validation.valid:
        logger.info("Schema for %s is invalid; skipping CSS generation", config.name)
        return CompileResult(
            success=False,
            css="",
            manifest=generate_ai_manifest(config),
            errors=errors,
            warnings=warnings,
        )

    css = compile_system(config, minify=minify)
    manifest = generate_ai_manifest(config)
    logger.debug(
        "Compiled %s: %d bytes CSS, %d errors, %d warnings",
        config.name,
        len(css),
        len(errors),
        len(warnings),
    )
    return CompileResult(
        success=not errors, css=css, manifest=manifest, errors=errors, warnings=warnings
    )
