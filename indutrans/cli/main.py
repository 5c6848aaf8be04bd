from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from indutrans.ai.gemini import default_key_sources
from indutrans.cli.common import DEFAULT_CONFIG, load_conf, read_input
from indutrans.core.errors import PreconditionError, TranslationError
from indutrans.core.languages import LITERAL, SUPPORTED_LANGUAGES, display_name, normalize_languages
from indutrans.core.models import DEFAULT_REGION, TENCENT_REGIONS, TencentCredentials, TranslationRecord
from indutrans.infra.secure_config import load_tencent_credentials, save_tencent_credentials
from indutrans.process.engine import prepare_units
from indutrans.services.exporting import export_records
from indutrans.services.translating import resolve_languages, translate_text

app = typer.Typer(help="InduTrans CLI: segment, translate and export industrial terminology")
console = Console(highlight=False)


def _echo(s: str) -> None:
    typer.echo(s)


def _render(records: List[TranslationRecord], languages: List[str]) -> None:
    table = Table(title=f"翻译结果 ({len(records)})", show_lines=True)
    table.add_column("原文 (CN)", overflow="fold")
    for code in languages:
        table.add_column(display_name(code), overflow="fold", style="italic" if code == LITERAL else None)
    for rec in records:
        table.add_row(rec.original, *[rec.translations.get(code, "") for code in languages])
    console.print(table)


@app.command()
def translate(
    input_file: Optional[Path] = typer.Argument(None, help="Text file to translate; '-' or omitted reads stdin"),
    html: Optional[Path] = typer.Option(None, "--html", exists=True, dir_okay=False, readable=True, help="Clipboard HTML (spreadsheet paste)"),
    mode: Optional[str] = typer.Option(None, "--mode", help="auto | line | paragraph"),
    provider: Optional[str] = typer.Option(None, "--provider", help="gemini | tencent"),
    lang: Optional[List[str]] = typer.Option(None, "--lang", "-l", help="Target language code (repeatable)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export file (.xlsx or .json)"),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, readable=True),
) -> None:
    """Segment the input, translate every unit and print a results table."""
    conf = load_conf(config, {"provider": provider, "split_mode": mode})
    raw = read_input(input_file)
    html_text = html.read_text(encoding="utf-8") if html is not None else None
    languages = resolve_languages(conf, lang)

    try:
        records = translate_text(raw, conf, html=html_text, languages=languages)
    except PreconditionError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)
    except TranslationError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)

    shown = normalize_languages(languages)
    _render(records, shown)
    if output is not None:
        try:
            path = export_records(records, shown, conf, output=output, provider=str(conf.get("provider") or "gemini"))
        except (OSError, ValueError) as e:
            typer.secho(f"导出失败：{e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        _echo(f"Exported: {path}")


@app.command()
def segment(
    input_file: Optional[Path] = typer.Argument(None, help="Text file; '-' or omitted reads stdin"),
    html: Optional[Path] = typer.Option(None, "--html", exists=True, dir_okay=False, readable=True),
    mode: str = typer.Option("auto", "--mode", help="auto | line | paragraph"),
) -> None:
    """Show the translation units the input splits into."""
    raw = read_input(input_file)
    html_text = html.read_text(encoding="utf-8") if html is not None else None
    try:
        units = prepare_units(raw, mode, html_text)
    except PreconditionError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)
    for i, unit in enumerate(units, 1):
        _echo(f"[{i}] {unit}")
    _echo(f"{len(units)} unit(s)")


@app.command()
def languages() -> None:
    """List supported target language codes."""
    for code, name in SUPPORTED_LANGUAGES.items():
        _echo(f"{code}\t{name}")


@app.command()
def configure(
    secret_id: str = typer.Option(..., "--secret-id", prompt=True),
    secret_key: str = typer.Option(..., "--secret-key", prompt=True, hide_input=True),
    region: str = typer.Option(DEFAULT_REGION, "--region"),
    config: Path = typer.Option(Path(DEFAULT_CONFIG), "--config", dir_okay=False),
) -> None:
    """Save Tencent Cloud credentials to the config file."""
    if not secret_id.strip() or not secret_key.strip():
        typer.secho("请输入 SecretId 和 SecretKey", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    if region not in TENCENT_REGIONS:
        typer.secho(f"Unknown region {region}; known: {', '.join(TENCENT_REGIONS)}", fg=typer.colors.YELLOW)
    path = save_tencent_credentials(
        config, TencentCredentials(secret_id=secret_id.strip(), secret_key=secret_key.strip(), region=region)
    )
    typer.secho(f"设置已保存：{path}", fg=typer.colors.GREEN)


@app.command()
def doctor(
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, readable=True),
) -> None:
    """Report which provider credentials are resolvable (no network calls)."""
    conf = load_conf(config)
    ok = True

    gemini_src = next((s.__name__ for s in default_key_sources(conf) if (s() or "").strip()), None)
    if gemini_src:
        _echo(f"Gemini API key: found ({gemini_src})")
    else:
        ok = False
        typer.secho("Gemini API key: missing (GEMINI_API_KEY / config gemini_api_key / API_KEY)", fg=typer.colors.YELLOW)

    creds = load_tencent_credentials(conf)
    if creds:
        _echo(f"Tencent credentials: found (region {creds.region})")
    else:
        ok = False
        typer.secho("Tencent credentials: missing (tencent_secret_id / tencent_secret_key)", fg=typer.colors.YELLOW)

    _echo(f"Target languages: {', '.join(resolve_languages(conf))}")
    _echo(f"Working directory: {os.getcwd()}")
    if ok:
        typer.secho("Health check passed", fg=typer.colors.GREEN)
    else:
        typer.secho("Health check incomplete; see messages above", fg=typer.colors.YELLOW)


def main() -> None:  # console_scripts entrypoint wrapper
    app()


if __name__ == "__main__":
    main()
