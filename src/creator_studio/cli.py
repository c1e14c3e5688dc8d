"""
CLI interface for Creator Studio
"""

import asyncio
import logging
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.tree import Tree

from creator_studio import __version__
from creator_studio.config import DEFAULT_EXPORT_FILENAME, StudioConfig
from creator_studio.errors import CreatorStudioError
from creator_studio.models import (
    ContentGenerationResult,
    ContentType,
    DescriptionLength,
    SavedProject,
    SearchVolume,
    TimeFrame,
)
from creator_studio.storage import TRENDING_TIME_FRAME_KEY, Storage
from creator_studio.studio import create_studio


console = Console()

PACKAGE_CONTENT_TYPES = [t.value for t in ContentType if t != ContentType.TAGS_ONLY]


def run_async(coro):
    """Run a coroutine, turning studio errors into a clean exit"""
    try:
        return asyncio.run(coro)
    except CreatorStudioError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


def get_score_color(score: float) -> str:
    """Get color based on a 0-100 score"""
    if score >= 80:
        return "bright_green"
    elif score >= 60:
        return "green"
    elif score >= 40:
        return "yellow"
    elif score >= 20:
        return "orange1"
    else:
        return "red"


def get_volume_color(volume: SearchVolume) -> str:
    colors = {
        SearchVolume.HIGH: "bright_green",
        SearchVolume.MEDIUM: "yellow",
        SearchVolume.LOW: "dim",
    }
    return colors.get(volume, "white")


def spinner(description: str) -> Progress:
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )
    progress.add_task(description, total=None)
    return progress


def colored_score(score: int) -> str:
    color = get_score_color(score)
    return f"[{color}]{score}[/{color}]"


def format_package_as_markdown(idea: str, result: ContentGenerationResult) -> str:
    """Format a content package as markdown"""
    md = [f"# {idea}", ""]

    md.append("## Titles")
    for title in result.titles:
        md.append(f"- {title}")
    md.append("")

    md.append("## SEO Description")
    md.append(result.seo_description)
    md.append("")

    md.append("## Keywords")
    md.append(", ".join(result.keywords))
    md.append("")

    md.append("## Tags")
    md.append(", ".join(result.tags))

    return "\n".join(md)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """
    Creator Studio - AI-assisted YouTube metadata

    Discover trends, audit SEO, and generate titles, tags and descriptions.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    ctx.obj = StudioConfig.from_env()


@main.command()
@click.option("--timeframe", "-t", type=click.Choice([t.value for t in TimeFrame]), help="Look-back window (defaults to the last one used)")
@click.pass_obj
def trending(config: StudioConfig, timeframe: Optional[str]):
    """Discover trending videos and Shorts"""

    async def _run():
        async with Storage(config.db_path) as storage:
            stored = await storage.get_preference(TRENDING_TIME_FRAME_KEY, TimeFrame.HOURS_24.value)
            time_frame = TimeFrame(timeframe or stored)

            with spinner(f"Searching trends for the {time_frame.phrase}..."):
                async with create_studio(config) as studio:
                    report = await studio.fetch_trending_videos(time_frame)

            await storage.set_preference(TRENDING_TIME_FRAME_KEY, time_frame.value)

        if not report.trends:
            console.print("[yellow]No trending videos found. Try again later.[/yellow]")
            return

        table = Table(
            title=f"Trending ({time_frame.phrase})",
            box=box.ROUNDED,
            show_lines=True,
            title_style="bold magenta",
        )

        table.add_column("#", style="dim", width=3)
        table.add_column("Type", justify="center", width=6)
        table.add_column("Title", style="bold", max_width=45)
        table.add_column("Channel", max_width=20)
        table.add_column("Views", justify="right", width=8)
        table.add_column("Why Trending", max_width=60)

        for item in report.trends:
            title = f"[link={item.url}]{item.title}[/link]" if item.url else item.title
            table.add_row(
                str(item.rank),
                item.type.value,
                title,
                item.channel,
                item.views,
                item.why_trending,
            )

        console.print(table)

        if report.citations:
            console.print("\n[bold]Sources[/bold]")
            for citation in report.citations:
                console.print(f"  - [link={citation.uri}]{citation.title or citation.uri}[/link]")

    run_async(_run())


@main.command()
@click.argument("title")
@click.option("--description", "-d", default="", help="Video description")
@click.option("--tags", "-t", default="", help="Comma-separated tags")
@click.pass_obj
def seo(config: StudioConfig, title: str, description: str, tags: str):
    """Audit the SEO of a title, description and tags"""

    async def _run():
        with spinner("Analyzing SEO..."):
            async with create_studio(config) as studio:
                result = await studio.analyze_seo(title, description, tags)

        table = Table(title="SEO Scores", box=box.ROUNDED, title_style="bold magenta")
        table.add_column("Area", style="bold")
        table.add_column("Score", justify="center", width=8)
        table.add_column("Feedback", max_width=70)

        table.add_row("Overall", colored_score(result.score), "")
        table.add_row("Title", colored_score(result.title_score), result.title_feedback)
        table.add_row("Description", colored_score(result.description_score), result.description_feedback)
        table.add_row("Tags", colored_score(result.tags_score), result.tags_feedback)
        console.print(table)

        tree = Tree("[bold]Findings[/bold]")
        for label, items in [
            ("Strengths", result.strengths),
            ("Weaknesses", result.weaknesses),
            ("Suggestions", result.suggestions),
            ("Keywords found", result.keywords_found),
        ]:
            branch = tree.add(f"{label} ({len(items)})")
            for entry in items:
                branch.add(entry)
        console.print(tree)

    run_async(_run())


@main.command()
@click.argument("topic")
@click.option("--save", is_flag=True, help="Save the suggestions as a project")
@click.pass_obj
def tags(config: StudioConfig, topic: str, save: bool):
    """Generate tags and titles for a topic"""

    async def _run():
        with spinner(f"Researching tags for '{topic}'..."):
            async with create_studio(config) as studio:
                suggestions = await studio.generate_tags_and_titles(topic)

        if not suggestions.tags and not suggestions.titles:
            console.print(f"[yellow]No suggestions found for '{topic}'[/yellow]")
            return

        table = Table(title=f"Tags: '{topic}'", box=box.ROUNDED)
        table.add_column("Tag", style="bold")
        table.add_column("Volume", justify="center", width=8)
        table.add_column("Relevance", justify="center", width=10)

        for tag in suggestions.tags:
            color = get_volume_color(tag.volume)
            table.add_row(tag.tag, f"[{color}]{tag.volume.value}[/{color}]", colored_score(tag.relevance))
        console.print(table)

        if suggestions.titles:
            console.print("\n[bold magenta]Title Ideas[/bold magenta]")
            for idx, title in enumerate(suggestions.titles, 1):
                console.print(f"  {idx}. {title}")

        if save:
            project = SavedProject.from_tag_suggestions(topic, suggestions)
            async with Storage(config.db_path) as storage:
                await storage.save_project(project)
            console.print(f"[green]Saved project {project.id}[/green]")

    run_async(_run())


@main.command()
@click.argument("idea")
@click.option("--type", "-T", "content_type", type=click.Choice(PACKAGE_CONTENT_TYPES), default=ContentType.LONG_VIDEO.value, help="Kind of content")
@click.option("--description", "-d", default="", help="Draft description to improve")
@click.option("--tags", "-t", default="", help="Draft tags")
@click.option("--duration", help="Video duration (long videos)")
@click.option("--markdown", "as_markdown", is_flag=True, help="Print the package as markdown")
@click.option("--save", is_flag=True, help="Save the package as a project")
@click.pass_obj
def create(
    config: StudioConfig,
    idea: str,
    content_type: str,
    description: str,
    tags: str,
    duration: Optional[str],
    as_markdown: bool,
    save: bool,
):
    """Generate a full content package: titles, description, keywords, tags"""

    async def _run():
        with spinner("Generating content package..."):
            async with create_studio(config) as studio:
                result = await studio.generate_content_strategy(
                    content_type, idea, description, tags, duration
                )

        if not result.titles:
            console.print("[yellow]The generated package was empty. Try rephrasing your idea.[/yellow]")
            return

        if as_markdown:
            console.print(Markdown(format_package_as_markdown(idea, result)))
        else:
            console.print(Panel(
                "\n".join(f"{idx}. {t}" for idx, t in enumerate(result.titles, 1)),
                title="[bold cyan]Titles[/bold cyan]",
                border_style="cyan",
            ))
            console.print(Panel(result.seo_description, title="[bold cyan]SEO Description[/bold cyan]", border_style="cyan"))
            console.print(f"[bold]Keywords:[/bold] {', '.join(result.keywords)}")
            console.print(f"[bold]Tags:[/bold] {', '.join(result.tags)}")

        if save:
            project = SavedProject.from_package(idea, content_type, result)
            async with Storage(config.db_path) as storage:
                await storage.save_project(project)
            console.print(f"[green]Saved project {project.id}[/green]")

    run_async(_run())


@main.command()
@click.argument("name_or_url")
@click.option("--save", is_flag=True, help="Keep the analysis in competitor history")
@click.pass_obj
def competitor(config: StudioConfig, name_or_url: str, save: bool):
    """Analyze a competitor channel by name or URL"""

    async def _run():
        with spinner(f"Analyzing '{name_or_url}'..."):
            async with create_studio(config) as studio:
                result = await studio.analyze_competitor(name_or_url)

        header = f"[bold]Subscribers:[/bold] {result.subscriber_count or 'n/a'}  |  [bold]Trending score:[/bold] {colored_score(result.trending_score)}  |  [bold]Trending videos:[/bold] {result.trending_video_count}"
        if result.channel_url:
            header += f"\n[bold]Channel:[/bold] {result.channel_url}"

        console.print(Panel(
            f"""{header}

[bold]Thumbnails:[/bold] {result.thumbnail_strategy}
[bold]Structure:[/bold] {result.content_structure}
[bold]Schedule:[/bold] {result.upload_schedule}

[bold]Keywords:[/bold] {', '.join(result.common_keywords)}
""",
            title=f"[bold cyan]{result.competitor_name}[/bold cyan]",
            border_style="cyan",
        ))

        if result.top_videos:
            table = Table(title="Top Videos", box=box.ROUNDED)
            table.add_column("Title", style="bold", max_width=55)
            table.add_column("Views", justify="right", width=10)
            table.add_column("Uploaded", width=14)
            for video in result.top_videos:
                table.add_row(video.title, video.views, video.upload_date)
            console.print(table)

        tree = Tree("[bold]Assessment[/bold]")
        strengths = tree.add("Strengths")
        for entry in result.strengths:
            strengths.add(f"[green]{entry}[/green]")
        weaknesses = tree.add("Weaknesses")
        for entry in result.weaknesses:
            weaknesses.add(f"[red]{entry}[/red]")
        console.print(tree)

        if save:
            async with Storage(config.db_path) as storage:
                item = await storage.save_competitor(result)
            console.print(f"[green]Saved analysis {item.id}[/green]")

    run_async(_run())


@main.command()
@click.argument("title")
@click.option("--tags", "-t", default="", help="Tags or keywords to weave in")
@click.option("--length", "-l", type=click.Choice([d.value for d in DescriptionLength]), default=DescriptionLength.MEDIUM.value, help="Description length")
@click.pass_obj
def describe(config: StudioConfig, title: str, tags: str, length: str):
    """Write a video description"""

    async def _run():
        with spinner("Writing description..."):
            async with create_studio(config) as studio:
                text = await studio.generate_video_description(title, tags, length)

        if not text:
            console.print("[yellow]The model returned no description.[/yellow]")
            return

        console.print(text)

    run_async(_run())


@main.command()
@click.option("--limit", "-l", default=25, help="Number of analyses to show")
@click.pass_obj
def competitors(config: StudioConfig, limit: int):
    """View competitor analysis history"""

    async def _run():
        async with Storage(config.db_path) as storage:
            items = await storage.get_competitors(limit=limit)

        if not items:
            console.print("[yellow]No competitor analyses saved.[/yellow]")
            console.print("[dim]Use --save with 'competitor' to keep an analysis.[/dim]")
            return

        table = Table(title="Competitor History", box=box.ROUNDED)
        table.add_column("ID", style="dim")
        table.add_column("Channel", style="bold")
        table.add_column("Subscribers", justify="right")
        table.add_column("Score", justify="center", width=8)

        for item in items:
            table.add_row(item.id, item.competitor_name, item.subscriber_count or "", colored_score(item.trending_score))

        console.print(table)

    run_async(_run())


@main.group()
def projects():
    """Manage saved projects"""
    pass


@projects.command("list")
@click.option("--limit", "-l", default=25, help="Number of projects to show")
@click.pass_obj
def list_projects(config: StudioConfig, limit: int):
    """List saved projects, newest first"""

    async def _run():
        async with Storage(config.db_path) as storage:
            saved = await storage.get_projects(limit=limit)

        if not saved:
            console.print("[yellow]No saved projects found.[/yellow]")
            console.print("[dim]Use --save with 'create' or 'tags' to save a project.[/dim]")
            return

        table = Table(title="Saved Projects", box=box.ROUNDED)
        table.add_column("ID", style="dim")
        table.add_column("Idea", style="bold", max_width=40)
        table.add_column("Type", justify="center")
        table.add_column("Saved", width=17)
        table.add_column("Titles", justify="right")

        for project in saved:
            table.add_row(
                project.id,
                project.idea,
                project.content_type,
                project.created_at.strftime("%Y-%m-%d %H:%M"),
                str(len(project.titles)),
            )

        console.print(table)

    run_async(_run())


@projects.command("show")
@click.argument("project_id")
@click.pass_obj
def show_project(config: StudioConfig, project_id: str):
    """Show a saved project as markdown"""

    async def _run():
        async with Storage(config.db_path) as storage:
            return await storage.get_project(project_id)

    project = run_async(_run())
    if project is None:
        console.print(f"[red]No project with id {project_id}[/red]")
        raise SystemExit(1)

    console.print(Markdown(format_package_as_markdown(project.idea, project)))


@projects.command("delete")
@click.argument("project_id")
@click.confirmation_option(prompt="Delete this project?")
@click.pass_obj
def delete_project(config: StudioConfig, project_id: str):
    """Delete a saved project"""

    async def _run():
        async with Storage(config.db_path) as storage:
            deleted = await storage.delete_project(project_id)

        if deleted:
            console.print(f"[green]Deleted project {project_id}[/green]")
        else:
            console.print(f"[yellow]No project with id {project_id}[/yellow]")

    run_async(_run())


@projects.command("export")
@click.argument("path", default=DEFAULT_EXPORT_FILENAME, type=click.Path(dir_okay=False))
@click.pass_obj
def export_projects(config: StudioConfig, path: str):
    """Back up all saved projects to a JSON file"""

    async def _run():
        async with Storage(config.db_path) as storage:
            count = await storage.export_projects(path)

        console.print(f"[green]Exported {count} projects to {path}[/green]")

    run_async(_run())


@main.command()
@click.pass_obj
def stats(config: StudioConfig):
    """Show storage statistics"""

    async def _run():
        async with Storage(config.db_path) as storage:
            data = await storage.get_stats()

        console.print("\n[bold magenta]Storage Statistics[/bold magenta]\n")

        console.print(f"Saved Projects: [cyan]{data['total_projects']}[/cyan]")
        console.print(f"Competitor Analyses: [cyan]{data['total_competitors']}[/cyan]")

        if data.get("projects_by_type"):
            console.print("\n[bold]Projects by Type:[/bold]")
            for content_type, count in sorted(data["projects_by_type"].items(), key=lambda x: x[1], reverse=True):
                console.print(f"  {content_type}: {count}")

    run_async(_run())


if __name__ == "__main__":
    main()
