"""Application context management for the CLI."""

from dataclasses import dataclass

from hbschema.cli.common.exits import die, exit_from_exc
from hbschema.core.auth import AuthError
from hbschema.core.context import RunContext
from hbschema.core.errors import SchemaTranslatorError
from hbschema.core.translator import SchemaTranslationOptions, SchemaTranslator


@dataclass
class TranslateAppContext:
    """Application context holding the run context and the wired translator."""

    options: SchemaTranslationOptions
    run: RunContext
    translator: SchemaTranslator


def build_translate_context(options: SchemaTranslationOptions) -> TranslateAppContext:
    """Build the translator for validated options, exiting on setup failures.

    Args:
        options: Validated source/destination options.

    Returns:
        TranslateAppContext: Context with a ready-to-run translator.
    """
    run = RunContext()
    try:
        translator = SchemaTranslator.from_options(options, ctx=run)
    except AuthError as exc:
        die(str(exc), code=1)
    except SchemaTranslatorError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    return TranslateAppContext(options=options, run=run, translator=translator)
