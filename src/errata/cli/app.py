import random
from datetime import date, datetime
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from errata.core.config import ErrataConfig
from errata.core.loader import load_posts
from errata.core.taxonomy import build_tag_index, filter_by_tag
from errata.exceptions import ErrataError
from errata.features.authoring import create_post
from errata.features.rotation import pick_topic
from errata.features.site import build_site
from errata.logging_setup import configure_logging

app = typer.Typer(
    name="errata",
    help="errata - static site generator for dated Markdown posts",
    no_args_is_help=True,
)

console = Console()

SITE_ROOT_OPTION = typer.Option(
    None,
    "--site-root",
    "-C",
    help="Site root containing .errata.toml (defaults to the current directory).",
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Logging level (overrides ERRATA_LOG_LEVEL)."),
) -> None:
    """Build and maintain a blog of dated Markdown posts."""
    configure_logging(log_level)


def _load_config(site_root: Path | None) -> ErrataConfig:
    try:
        return ErrataConfig.load(site_root)
    except ErrataError as exc:
        _fail(exc)


def _fail(exc: ErrataError) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False)
    raise typer.Exit(code=1) from exc


def _print_issues(issues) -> None:
    table = Table(title="Problems")
    table.add_column("File", style="bold cyan")
    table.add_column("Problem")
    for issue in issues:
        table.add_row(escape(Path(issue.path).name), escape(issue.message))
    console.print(table)


@app.command()
def build(
    site_root: Path = SITE_ROOT_OPTION,
    topic: str = typer.Option(None, "--topic", "-t", help="Only publish posts with this tag."),
    strict: bool = typer.Option(False, "--strict", help="Abort on the first invalid post."),
):
    """
    Render posts into the output directory.
    """
    config = _load_config(site_root)
    try:
        result = build_site(config, topic=topic, strict=True if strict else None)
    except ErrataError as exc:
        _fail(exc)

    if result.issues:
        _print_issues(result.issues)
    console.print(
        f"[bold green]Built {len(result.posts)} posts[/bold green] "
        f"({len(result.pages_written)} files) into {result.output_dir}"
    )


@app.command()
def check(site_root: Path = SITE_ROOT_OPTION):
    """
    Validate every post without writing anything.
    """
    config = _load_config(site_root)
    try:
        report = load_posts(
            config.paths.abs_posts_dir,
            include_drafts=True,
            default_layout=config.build.default_layout,
        )
    except ErrataError as exc:
        _fail(exc)

    if not report.ok:
        _print_issues(report.issues)
        console.print(f"[bold red]✘[/bold red] {len(report.issues)} problem(s), {len(report.posts)} valid post(s)")
        raise typer.Exit(code=1)

    console.print(f"[bold green]✔[/bold green] {len(report.posts)} posts are valid")


@app.command("list")
def list_posts(
    site_root: Path = SITE_ROOT_OPTION,
    tag: str = typer.Option(None, "--tag", help="Only list posts with this tag."),
):
    """
    List posts, newest first.
    """
    config = _load_config(site_root)
    try:
        report = load_posts(config.paths.abs_posts_dir, include_drafts=config.build.drafts)
    except ErrataError as exc:
        _fail(exc)

    posts = filter_by_tag(report.posts, tag) if tag else report.posts

    table = Table(title=f"Posts ({len(posts)})")
    table.add_column("Date", style="bold cyan")
    table.add_column("Title")
    table.add_column("Tags", style="magenta")
    for post in posts:
        table.add_row(post.date.isoformat(), escape(post.title), escape(", ".join(post.tags)))
    console.print(table)


@app.command()
def tags(site_root: Path = SITE_ROOT_OPTION):
    """
    Show every tag with its post count.
    """
    config = _load_config(site_root)
    try:
        report = load_posts(config.paths.abs_posts_dir, include_drafts=config.build.drafts)
    except ErrataError as exc:
        _fail(exc)

    table = Table(title="Tags")
    table.add_column("Tag", style="bold cyan")
    table.add_column("Posts", justify="right")
    for tag, tagged in build_tag_index(report.posts).items():
        table.add_row(escape(tag), str(len(tagged)))
    console.print(table)


@app.command()
def new(
    title: str = typer.Argument(..., help="Title of the new post."),
    tag: list[str] = typer.Option(None, "--tag", "-t", help="Tag to add (repeatable)."),
    layout: str = typer.Option(None, "--layout", help="Layout name (defaults to build.default_layout)."),
    on: datetime = typer.Option(None, "--date", formats=["%Y-%m-%d"], help="Publish date (YYYY-MM-DD)."),
    site_root: Path = SITE_ROOT_OPTION,
):
    """
    Create a new post with front matter.
    """
    config = _load_config(site_root)
    published: date | None = on.date() if on else None
    try:
        path = create_post(
            config.paths.abs_posts_dir,
            title,
            tags=tag or (),
            layout=layout or config.build.default_layout,
            on=published,
        )
    except ErrataError as exc:
        _fail(exc)
    console.print(f"[bold green]Created[/bold green] {escape(str(path))}")


@app.command()
def rotate(
    site_root: Path = SITE_ROOT_OPTION,
    seed: int = typer.Option(None, "--seed", help="Seed for a reproducible topic choice."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only print the chosen topic."),
):
    """
    Pick a random topic and build the site for it.
    """
    config = _load_config(site_root)
    rng = random.Random(seed) if seed is not None else None
    try:
        topic = pick_topic(config.rotation.topics, rng=rng)
    except ErrataError as exc:
        _fail(exc)

    console.print(f"Topic: [bold cyan]{escape(topic)}[/bold cyan]")
    if dry_run:
        return

    try:
        result = build_site(config, topic=topic)
    except ErrataError as exc:
        _fail(exc)
    if result.issues:
        _print_issues(result.issues)
    console.print(
        f"[bold green]Built {len(result.posts)} posts[/bold green] for '{escape(topic)}' into {result.output_dir}"
    )


if __name__ == "__main__":
    app()
