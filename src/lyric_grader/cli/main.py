"""Main CLI entry point for Lyric Grader."""

from pathlib import Path
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from lyric_grader import __version__
from lyric_grader.config import Settings, get_settings
from lyric_grader.errors import LyricGraderError, ProviderError
from lyric_grader.models.analysis import AnalysisProfile, AnalysisResult, Priority
from lyric_grader.models.remix import Persona, RemixStyle

console = Console()

GRADE_COLORS = {"A": "green", "B": "cyan", "C": "yellow", "D": "magenta", "F": "red"}
PRIORITY_COLORS = {
    Priority.CRITICAL: "bold red",
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


@click.group()
@click.version_option(version=__version__, prog_name="lyric-grader")
def main() -> None:
    """Lyric Grader - Grade song and rap lyrics.

    Score lyrics across weighted dimensions, get prioritized feedback,
    generate an improved remix, and transcribe recordings to lyrics.
    """
    pass


def _read_lyrics(lyrics_file: Path | None, text: str | None) -> str:
    """Lyrics from --text, a file, or stdin when the file is '-'."""
    from lyric_grader.lyrics_file import load_lyrics_file

    if text is not None:
        return text
    if lyrics_file is None:
        console.print("[red]Error: LYRICS_FILE or --text is required[/red]")
        raise SystemExit(1)
    if str(lyrics_file) == "-":
        return sys.stdin.read()
    try:
        return load_lyrics_file(lyrics_file)
    except LyricGraderError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1) from e


def _grade_style(grade: str) -> str:
    return GRADE_COLORS.get(grade[:1], "white")


def _print_result(result: AnalysisResult, show_lines: bool) -> None:
    style = _grade_style(result.grade)
    console.print(
        f"Grade: [bold {style}]{result.grade}[/bold {style}]  "
        f"Score: [bold]{result.overall_score:.1f}[/bold]  "
        f"Profile: {result.profile.label}"
    )
    if result.song_purpose:
        purpose = result.song_purpose
        console.print(
            f"Song purpose: {purpose.primary.replace('_', ' ')} "
            f"({purpose.confidence} confidence)"
        )
    if result.emotion:
        emotion = result.emotion
        console.print(
            f"Emotion: {emotion.primary} (range {emotion.range}, intensity {emotion.intensity})"
        )
    if result.rap_analysis:
        metrics = result.rap_analysis
        console.print(
            f"Rap metrics: {metrics.get('avg_syllables', 0.0):.1f} syllables per line, "
            f"rhyme complexity {metrics.get('rhyme_complexity', 0.0):.0f}"
        )
    console.print()
    console.print(result.feedback.overall)
    console.print()

    table = Table(title="Breakdown")
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    table.add_column("Sub-scores")
    for name, score in result.breakdown.items():
        subscores = ", ".join(f"{k.replace('_', ' ')} {v:.0f}" for k, v in score.subscores.items())
        table.add_row(name.replace("_", " ").title(), f"{score.value:.1f}", subscores)
    console.print(table)

    if result.strengths:
        console.print("[bold green]Strengths[/bold green]")
        for strength in result.strengths:
            console.print(f"  + {strength}")
    if result.weaknesses:
        console.print("[bold red]Weaknesses[/bold red]")
        for weakness in result.weaknesses:
            console.print(f"  - {weakness}")

    if result.improvements:
        console.print()
        console.print("[bold]Improvements[/bold]")
        for improvement in result.improvements:
            color = PRIORITY_COLORS[improvement.priority]
            console.print(
                f"  [{color}]{improvement.priority.name}[/{color}] "
                f"{improvement.category}: {improvement.issue}"
            )
            console.print(f"      {improvement.suggestion}")

    if result.feedback.specific_issues:
        console.print()
        console.print("[bold]Specific issues[/bold]")
        for issue in result.feedback.specific_issues:
            color = PRIORITY_COLORS[issue.severity]
            console.print(f"  [{color}]{issue.type}[/{color}] x{issue.count}: {issue.fix}")

    if show_lines and result.feedback.line_by_line:
        console.print()
        lines = Table(title="Line by line")
        lines.add_column("#", justify="right")
        lines.add_column("Line")
        lines.add_column("Score", justify="right")
        lines.add_column("Notes")
        for line in result.feedback.line_by_line:
            notes = "; ".join(line.issues + line.strengths)
            lines.add_row(str(line.line_number), Text(line.text), str(line.score), Text(notes))
        console.print(lines)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


@main.command()
@click.argument("lyrics_file", type=click.Path(path_type=Path), required=False)
@click.option("--text", "-t", type=str, help="Grade this text instead of a file")
@click.option(
    "--export",
    "export_path",
    type=click.Path(path_type=Path),
    help="Write the analysis as JSON to this file, or into this directory",
)
@click.option(
    "--save",
    is_flag=True,
    help="Write the analysis as JSON into the configured output directory",
)
@click.option("--lines/--no-lines", default=False, help="Show the line-by-line breakdown")
@click.option("--quiet", "-q", is_flag=True, help="Hide per-stage progress")
def grade(
    lyrics_file: Path | None,
    text: str | None,
    export_path: Path | None,
    save: bool,
    lines: bool,
    quiet: bool,
) -> None:
    """Grade the lyrics in LYRICS_FILE (.txt or .lrc, '-' for stdin).

    \b
    1. Clean text and detect song sections
    2. Classify as general or rap/hip-hop, and detect song purpose
    3. Score each dimension
    4. Compute the overall score and letter grade
    5. Generate feedback and prioritized improvements
    """
    from lyric_grader.export import default_export_path, write_export
    from lyric_grader.pipeline import analyze_lyrics

    lyrics = _read_lyrics(lyrics_file, text)

    console.print(f"[bold blue]Lyric Grader[/bold blue] v{__version__}")
    result = analyze_lyrics(lyrics, console=None if quiet else console)
    console.print()

    if result.failed:
        console.print("[bold red]Analysis failed![/bold red]")
        console.print(f"[red]Error: {result.error}[/red]")
        raise SystemExit(1)

    _print_result(result, lines)

    if export_path is not None or save:
        if export_path is None:
            target = default_export_path(result)
        elif export_path.is_dir():
            target = default_export_path(result, export_path)
        else:
            target = export_path
        path = write_export(result, target)
        console.print(f"Exported: [green]{path}[/green]")


@main.command()
@click.argument("lyrics_file", type=click.Path(path_type=Path), required=False)
@click.option("--text", "-t", type=str, help="Remix this text instead of a file")
@click.option(
    "--audio",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Remix this recording instead of generating from lyrics",
)
@click.option(
    "--style",
    type=click.Choice([s.value for s in RemixStyle]),
    help="Style to use instead of the automatic choice",
)
@click.option(
    "--persona",
    type=click.Choice([p.value for p in Persona]),
    help="Vocal persona to use instead of the automatic choice",
)
@click.option("--dry-run", is_flag=True, help="Only show the remix directive")
@click.option("--wait/--no-wait", default=True, help="Wait for the generated audio")
def remix(
    lyrics_file: Path | None,
    text: str | None,
    audio: Path | None,
    style: str | None,
    persona: str | None,
    dry_run: bool,
    wait: bool,
) -> None:
    """Generate an improved version of the lyrics in LYRICS_FILE."""
    from lyric_grader.pipeline import analyze_lyrics
    from lyric_grader.remix import SunoClient, build_remix_directive

    lyrics = _read_lyrics(lyrics_file, text)
    result = analyze_lyrics(lyrics)
    if result.failed:
        console.print(f"[red]Error: {result.error}[/red]")
        raise SystemExit(1)

    chosen_style = RemixStyle(style) if style else None
    chosen_persona = Persona(persona) if persona else None
    directive = build_remix_directive(result, style=chosen_style, persona=chosen_persona)

    console.print(
        f"Grade: [bold {_grade_style(result.grade)}]{result.grade}[/bold {_grade_style(result.grade)}] "
        f"({result.overall_score:.1f})"
    )
    console.print(f"Style: [cyan]{directive.style.value}[/cyan]")
    console.print(f"Persona: [cyan]{directive.persona.value}[/cyan]")
    console.print(f"Prompt: {directive.prompt}")
    console.print("[bold]What changes[/bold]")
    for line in directive.improvements:
        console.print(f"  {line}")

    if dry_run:
        return

    def on_retry(attempt: int, delay: float, error: ProviderError) -> None:
        console.print(f"[yellow]Attempt {attempt} failed ({error}), retrying in {delay:.0f}s...[/yellow]")

    client = SunoClient.from_settings(on_retry=on_retry)
    try:
        if audio is not None:
            job = client.cover(audio, directive)
        else:
            job = client.generate(result.lyrics, directive)
        console.print(f"Submitted job [green]{job.job_id}[/green] (about {job.estimated_time})")

        if not wait:
            return

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Generating...", total=None)

            def on_progress(attempt: int, percent: float) -> None:
                progress.update(task, description=f"Processing... {percent:.0f}% complete")

            status = client.wait_for_completion(job.job_id, on_progress=on_progress)
    except LyricGraderError as e:
        console.print(f"[bold red]Generation failed:[/bold red] {e}")
        raise SystemExit(1) from e

    console.print("[bold green]Generation complete![/bold green]")
    console.print(f"Audio: {status.audio_url}")


@main.command()
@click.argument("audio_file", type=click.Path(path_type=Path))
@click.option("--language", "-l", type=str, help="Language hint, e.g. 'en'")
@click.option(
    "--timestamps/--no-timestamps",
    default=False,
    help="Prefix each line with its [MM:SS] start time",
)
@click.option("--structure", is_flag=True, help="Insert verse/chorus/bridge markers")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Write the transcription to this file",
)
@click.option("--grade", "grade_after", is_flag=True, help="Grade the transcribed lyrics")
def transcribe(
    audio_file: Path,
    language: str | None,
    timestamps: bool,
    structure: bool,
    output: Path | None,
    grade_after: bool,
) -> None:
    """Transcribe AUDIO_FILE to lyrics."""
    from lyric_grader.pipeline import analyze_lyrics
    from lyric_grader.transcription import WhisperTranscriber

    transcriber = WhisperTranscriber.from_settings()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Starting...", total=100)

            def on_progress(percent: int, message: str) -> None:
                progress.update(task, completed=percent, description=message)

            transcription = transcriber.transcribe(
                audio_file,
                language=language,
                timestamping="line" if timestamps else "none",
                include_structure=structure,
                on_progress=on_progress,
            )
    except LyricGraderError as e:
        console.print(f"[bold red]Transcription failed:[/bold red] {e}")
        raise SystemExit(1) from e

    console.print(
        f"Language: {transcription.language}  "
        f"Duration: {transcription.duration:.1f}s  "
        f"Confidence: {transcription.confidence}%"
    )
    console.print()
    console.print(transcription.text, markup=False)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(transcription.text + "\n", encoding="utf-8")
        console.print(f"Saved: [green]{output}[/green]")

    if grade_after:
        console.print()
        result = analyze_lyrics(transcription.text)
        if result.failed:
            console.print(f"[red]Error: {result.error}[/red]")
            raise SystemExit(1)
        _print_result(result, show_lines=False)


@main.command()
@click.option(
    "--check",
    is_flag=True,
    help="Verify the Groq key and list its Whisper models (contacts the provider)",
)
def info(check: bool) -> None:
    """Show current configuration, remix options and provider status."""
    from lyric_grader.remix import available_personas, available_styles

    settings = get_settings()

    console.print("[bold]Configuration[/bold]")
    console.print(f"  Output directory: {settings.output_dir}")
    console.print(f"  Whisper model: {settings.whisper_model}")
    console.print(f"  Groq API: {settings.groq_base_url}")
    console.print(f"  Suno API: {settings.suno_base_url}")
    console.print(f"  Generation quality: {settings.generation_quality}")
    console.print(f"  Request timeout: {settings.request_timeout}s")
    console.print(f"  Max retries: {settings.max_retries}")
    console.print(
        f"  Polling: every {settings.poll_interval}s, "
        f"up to {settings.max_poll_attempts} checks"
    )
    console.print()

    table = Table(title="Remix options")
    table.add_column("Profile")
    table.add_column("Styles")
    table.add_column("Personas")
    for profile in AnalysisProfile:
        table.add_row(
            profile.label,
            ", ".join(style.value for style in available_styles(profile)),
            ", ".join(persona.value for persona in available_personas(profile)),
        )
    console.print(table)
    console.print()

    console.print("[bold]Provider keys[/bold]")
    _check_key("Groq (transcription)", settings.groq_api_key)
    _check_key("Suno (generation)", settings.suno_api_key)

    if check:
        _check_transcription(settings)


def _check_key(name: str, key: str | None) -> None:
    if key:
        console.print(f"  [green]{name}[/green]: configured")
    else:
        console.print(f"  [red]{name}[/red]: not configured")


def _check_transcription(settings: Settings) -> None:
    from lyric_grader.transcription import WhisperTranscriber

    transcriber = WhisperTranscriber.from_settings(settings)
    console.print()
    if not transcriber.validate_api_key():
        console.print("  [red]Groq key rejected or missing[/red]")
        return
    console.print("  [green]Groq key accepted[/green]")
    console.print(f"  Whisper models: {', '.join(transcriber.supported_models())}")


if __name__ == "__main__":
    main()
