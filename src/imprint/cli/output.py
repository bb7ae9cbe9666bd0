"""Rich console output for the imprint command.

Progress lines, the operation table and the run summary all go through a
single shared Console so tests and callers can redirect it.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_ARROW = "→"


def print_header(version: str) -> None:
    """Print the program name and version."""
    console.print()
    console.rule(f"[bold]Imprint[/bold] v{version}", align="left")


def print_step(message: str) -> None:
    console.print(f"\n[cyan]{SYM_STEP}[/cyan] {message}")


def print_font_info(font_path: str, family: str, font_format: str, line_count: int) -> None:
    """Show which font the watermark lines were measured with.

    Args:
        font_path: Font file as given on the command line
        family: Family name from the font's name table
        font_format: "TrueType" or "OpenType"
        line_count: Number of watermark lines built from the font
    """
    # Text avoids markup interpretation of brackets in paths
    info = Text("  ")
    info.append(font_path, style="bold")
    info.append(f"  {family} / {font_format}", style="dim")
    console.print(info)
    console.print(f"  {line_count} watermark line{'' if line_count == 1 else 's'}")


def print_operations(descriptions: list[str]) -> None:
    """Print operations as a numbered table in the order they run."""
    if not descriptions:
        console.print("  [dim]none, image is only re-encoded[/dim]")
        return

    table = Table(show_header=False, box=None, padding=(0, 1, 0, 2))
    table.add_column(justify="right", style="dim")
    table.add_column()
    for index, description in enumerate(descriptions, start=1):
        table.add_row(str(index), description)
    console.print(table)


def _format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.0f}s"


def _format_size(size: tuple[int, int] | None) -> str:
    if size is None:
        return "?"
    return f"{size[0]}×{size[1]}"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    applied: int,
    input_size: tuple[int, int] | None,
    output_size: tuple[int, int] | None,
    slowest: tuple[str, float] | None = None,
) -> None:
    """Print the run summary.

    Args:
        output_path: Where the image was written
        file_size: Human-readable size of the written file
        total_time_s: Wall time from decode to encode
        applied: Number of operations applied
        input_size: Decoded input dimensions
        output_size: Output dimensions
        slowest: Name and duration in ms of the slowest operation
    """
    console.print(f"\n[bold green]{SYM_OK} Done[/bold green] in {_format_time(total_time_s)}")

    summary = Table(show_header=False, box=None, padding=(0, 1, 0, 2))
    summary.add_column(style="dim")
    summary.add_column()
    summary.add_row("output", Text(f"{output_path} ({file_size})"))
    summary.add_row(
        "size",
        f"{_format_size(input_size)} {SYM_ARROW} {_format_size(output_size)}",
    )
    summary.add_row("operations", str(applied))
    if slowest is not None:
        summary.add_row("slowest", f"{slowest[0]} ({slowest[1]:.1f}ms)")
    console.print(summary)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error, with an optional hint on the following line."""
    console.print(f"\n[bold red]{SYM_ERR}[/bold red] {message}", highlight=False)
    if details:
        console.print(f"  [dim]{details}[/dim]")
