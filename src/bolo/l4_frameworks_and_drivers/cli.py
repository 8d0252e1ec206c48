"""CLI entry point for bolo."""

from __future__ import annotations

import logging
import sys

import click

from bolo import __version__
from bolo.l1_entities.language import SELECTABLE_LANGUAGES, Language

log = logging.getLogger('bolo.cli')


def _parse_language(ctx, param, value):
    if value is None:
        return None
    try:
        return Language.from_code(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _list_languages(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    for i, lang in enumerate(SELECTABLE_LANGUAGES):
        info = lang.info
        click.echo(f'{i + 1}  {lang.value:<9} {info.flag} {info.label} ({info.sublabel})')
    ctx.exit()


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-l',
    '--language',
    default=None,
    callback=_parse_language,
    help="Initial language code: hinglish (or auto), en-IN, hi-IN, ta-IN, mr-IN.",
)
@click.option(
    '--list-languages',
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_list_languages,
    help='List selectable languages and exit.',
)
@click.version_option(version=__version__)
def cli(config_path, language):
    """bolo -- live multilingual dictation in the terminal."""
    import yaml  # noqa: PLC0415 -- deferred: not needed for --help
    from pydantic import ValidationError  # noqa: PLC0415 -- deferred: not needed for --help

    from bolo.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: engine stack not loaded on --help
        DependencyContainer,
    )
    from bolo.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )

    try:
        raw = DependencyContainer.config_loader().load_raw(config_path)
        config = build_app_config(raw)
    except FileNotFoundError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        click.echo(f'Error: invalid configuration: {e}', err=True)
        sys.exit(1)

    supported = _preflight_recognition()

    from bolo.l4_frameworks_and_drivers.app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help or --list-languages
        DictationApp,
    )

    container = DependencyContainer(config, language=language)
    app = DictationApp(
        config=config,
        controller=container.controller,
        clipboard=container.clipboard,
        supported=supported,
    )
    try:
        app.run()
    finally:
        container.close()
        log.info('bolo exited')


def _preflight_recognition() -> bool:
    from bolo.l3_interface_adapters.gateways.whisper_recognition_engine import (  # noqa: PLC0415 -- deferred: not loaded on --help
        recognition_supported,
    )

    try:
        supported = recognition_supported()
    except Exception as e:  # noqa: BLE001 -- best-effort probe; the TUI shows the unsupported state
        log.debug('Recognition probe failed', exc_info=True)
        click.echo(f'Warning: Cannot query audio devices ({e}).', err=True)
        return False
    if not supported:
        click.echo('Warning: speech recognition unavailable (no input device or pywhispercpp missing).', err=True)
    return supported
