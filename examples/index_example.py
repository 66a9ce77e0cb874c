#!/usr/bin/env python3
"""
Index Example for boxspace

This example walks through an object space with two TREE indexes:
- a unique primary index on field 0
- a non-unique secondary index on field 1

It shows inserts, point lookups through either index, a rejected duplicate
primary key, range scans, replace and delete.

Run with: python examples/index_example.py
"""

from boxspace import (
    DuplicateKeyError, FieldType, IndexSpec, IndexedSpace, InvalidArgumentError
)
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.rule import Rule
from rich import box


console = Console()


def print_header(title: str, subtitle: str = ""):
    """Print a header panel"""
    if subtitle:
        full_title = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
    else:
        full_title = f"[bold blue]{title}[/bold blue]"

    console.print(Panel(
        full_title,
        style="bright_blue",
        box=box.DOUBLE,
        padding=(1, 2)
    ))


def print_step(step_num: int, title: str, description: str = ""):
    """Print a step header"""
    step_text = f"[bold yellow]Step {step_num}: {title}[/bold yellow]"
    if description:
        step_text += f"\n[dim italic]{description}[/dim italic]"
    console.print(step_text)
    console.print()


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str):
    console.print(f"[bold red]✗[/bold red] {message}")


def tuples_table(title: str, tuples) -> Table:
    """Render tuples with their record ids"""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("RecordId", style="dim", justify="right")
    table.add_column("field 0", style="cyan")
    table.add_column("field 1", style="magenta")
    for tuple_obj in tuples:
        table.add_row(str(tuple_obj.get_record_id().get_sequence()),
                      *[repr(value) for value in tuple_obj])
    return table


def main():
    print_header("boxspace index walkthrough",
                 "unique vs non-unique TREE indexes")

    print_step(1, "Declare the space",
               "Index declarations are fixed when the space is created")
    space = IndexedSpace([
        IndexSpec.tree((0, FieldType.STR)),
        IndexSpec.tree((1, FieldType.STR), unique=False),
    ])
    console.print(space)
    console.print()

    print_step(2, "Insert three tuples sharing field 1")
    for i in range(3):
        space.insert([str(i), "x"])
    print_success(f"{space.count()} tuples stored")
    console.print()

    print_step(3, "Point lookups")
    console.print(tuples_table("select ['0', '1', '2'] on index 0",
                               space.select(["0", "1", "2"])))
    console.print(tuples_table("select 'x' on index 1",
                               space.select("x", index=1)))
    console.print()

    print_step(4, "Duplicate primary key")
    try:
        space.insert(["0", "y"])
    except DuplicateKeyError as e:
        print_error(str(e))
    print_success(f"Space still holds {space.count()} tuples")
    console.print()

    print_step(5, "Range scan, replace and delete")
    console.print(tuples_table("range '1'.. on index 0",
                               space.select_range(0, start="1")))
    space.replace(["1", "y"])
    console.print(tuples_table("select 'y' on index 1 after replace",
                               space.select("y", index=1)))
    space.delete("2")
    console.print(tuples_table("all tuples after delete '2'", space.iterate()))

    try:
        space.select(("0", "x"))
    except InvalidArgumentError as e:
        print_error(f"Malformed key rejected: {e}")

    console.print(Rule("[bold green]Done[/bold green]"))


if __name__ == "__main__":
    main()
