"""CLI entry point for the PO editor."""

import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import AIProvider, SuggestionConfig, load_settings, save_settings
from .core import EditorSession
from .editing import FilterType
from .exceptions import POEditorError
from .po import EntryStatus

STATUS_COLORS = {
    EntryStatus.PENDING: 'yellow',
    EntryStatus.TRANSLATED: 'green',
    EntryStatus.AI_SUGGESTED: 'cyan',
}


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg='red', err=True)
    raise SystemExit(1)


def _open_session(file: Path, provider: Optional[str] = None) -> EditorSession:
    settings = load_settings()
    if provider:
        settings.provider = AIProvider(provider)

    session = EditorSession(config=SuggestionConfig(), settings=settings)
    try:
        session.load_file(file)
    except POEditorError as e:
        _fail(str(e))
    return session


def _export(session: EditorSession, output: Optional[Path]) -> None:
    path = session.export_file(output)
    click.secho(f"Saved: {path}", fg='green')


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def cli(verbose: bool):
    """Edit Gettext PO translation catalogs with AI suggestions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--filter', 'filter_name',
    type=click.Choice([f.value for f in FilterType]),
    default=FilterType.ALL.value,
    help='Show only entries with this status'
)
@click.option('--search', '-s', default='', help='Only entries whose source or translation contains this text')
def show(file: Path, filter_name: str, search: str):
    """List entries of a PO file.

    FILE is the path to the PO file.
    """
    session = _open_session(file)
    entries = session.entries(FilterType(filter_name), search)

    if not entries:
        click.secho("No entries match your filter.", fg='yellow')
        return

    click.echo(f"Entries ({len(entries)} shown):\n")

    for entry in entries:
        click.secho(f"[{entry.status.value}] {entry.id}", fg=STATUS_COLORS[entry.status])
        if entry.comments:
            click.secho(f"  #. {entry.comments}", fg='cyan')
        if entry.context is not None:
            click.echo(f"  msgctxt: {entry.context}")
        click.echo(f"  msgid:   {entry.msgid}")
        click.echo(f"  msgstr:  {entry.msgstr}")
        click.echo()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def headers(file: Path):
    """Show the header fields of a PO file."""
    session = _open_session(file)

    if not session.catalog.headers:
        click.secho("No headers found.", fg='yellow')
        return

    for key, value in session.catalog.headers.items():
        click.echo(f"{key}: {value}")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stats(file: Path):
    """Show translation progress of a PO file."""
    session = _open_session(file)
    result = session.stats()

    click.echo(f"Total:      {result.total}")
    click.secho(f"Translated: {result.translated}", fg='green')
    click.secho(f"Pending:    {result.pending}", fg='yellow')
    click.echo(f"Complete:   {result.percent_complete:.1f}%")


@cli.command(name='set')
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('entry_id')
@click.argument('msgstr')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Where to save the edited file')
def set_translation(file: Path, entry_id: str, msgstr: str, output: Optional[Path]):
    """Set the translation of one entry.

    ENTRY_ID is the entry id as printed by `show` (context_msgid).
    """
    session = _open_session(file)

    try:
        entry = session.update_translation(entry_id, msgstr)
    except POEditorError as e:
        _fail(str(e))

    click.echo(f"{entry.msgid} -> {entry.msgstr} [{entry.status.value}]")
    _export(session, output)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('entry_id')
@click.option('--provider', type=click.Choice([p.value for p in AIProvider]), help='Override the configured provider')
@click.option('--apply', 'apply_index', type=click.IntRange(min=1), help='Apply suggestion N and save')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Where to save the edited file')
def suggest(
    file: Path,
    entry_id: str,
    provider: Optional[str],
    apply_index: Optional[int],
    output: Optional[Path]
):
    """Ask the AI provider for translation suggestions.

    ENTRY_ID is the entry id as printed by `show` (context_msgid).
    """
    session = _open_session(file, provider)

    try:
        suggestions = session.suggest(entry_id)
    except POEditorError as e:
        _fail(str(e))

    if not suggestions:
        click.secho("No suggestions returned.", fg='yellow')
        return

    click.echo(f"Suggestions ({session.target_language()}):")
    for i, suggestion in enumerate(suggestions, 1):
        click.echo(f"  {i}. {suggestion}")

    if apply_index is None:
        return

    if apply_index > len(suggestions):
        _fail(f"Only {len(suggestions)} suggestions available")

    entry = session.apply_suggestion(entry_id, suggestions[apply_index - 1])
    click.echo(f"\nApplied: {entry.msgstr}")
    _export(session, output)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Where to save the generated file')
def export(file: Path, output: Optional[Path]):
    """Re-generate a PO file in normalized form."""
    session = _open_session(file)
    _export(session, output)


@cli.command()
@click.option('--provider', type=click.Choice([p.value for p in AIProvider]), help='Provider used for suggestions')
@click.option('--openai-key', help='OpenAI API key')
@click.option('--gemini-key', help='Google Gemini API key')
def configure(provider: Optional[str], openai_key: Optional[str], gemini_key: Optional[str]):
    """Store the suggestion provider and API keys."""
    settings = load_settings(use_env=False)

    if provider:
        settings.provider = AIProvider(provider)
    if openai_key is not None:
        settings.openai_key = openai_key
    if gemini_key is not None:
        settings.gemini_key = gemini_key

    path = save_settings(settings)
    click.secho(f"Settings saved to {path}", fg='green')


@cli.command()
def check():
    """Check if the suggestion provider is configured."""
    settings = load_settings()

    if settings.has_key:
        click.secho("Suggestion provider is ready!", fg='green')
        click.echo(f"  Provider: {settings.provider.value}")
    else:
        click.secho(f"Error: no API key configured for {settings.provider.value}", fg='red')
        click.echo("\nTo fix this:")
        click.echo("  po-editor configure --provider openai --openai-key KEY")
        click.echo("  or set OPENAI_API_KEY / GEMINI_API_KEY")
        raise SystemExit(1)


if __name__ == '__main__':
    cli()
