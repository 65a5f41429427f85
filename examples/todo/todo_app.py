#!/usr/bin/env python3
"""
Reactive Lens TODO App Example
==============================

A terminal TODO application driven by TodoStore. It showcases:

- One immutable state value held in an undo history
- Views zoomed into the present with lenses
- A single subscription that re-renders on every change
- Batched actions that render once, however many writes they make

To run this example:
```bash
$ pip install -e . && python examples/todo/todo_app.py
```

Commands: `add <text>`, `toggle <n>`, `delete <n>`, `all`, `clear`,
`filter all|active|completed`, `undo`, `redo`, `quit`.
"""

import logging

from rich.console import Console
from rich.table import Table
from todo_item_model import SHORT_ID_LENGTH
from todo_store import LOG_LEVEL, TodoStore

# ==============================================================================================
# Logging Setup
# ==============================================================================================

logging.basicConfig(level=LOG_LEVEL)

console = Console()


# ==============================================================================================
# Rendering
# ==============================================================================================


def render(store: TodoStore) -> None:
    """Print the visible todos and the status line."""
    table = Table(title=f"todos ({store.filter_mode.get()})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("id", style="magenta")
    table.add_column("done", justify="center")
    table.add_column("text", style="cyan")

    for i, todo in enumerate(store.filtered_todos()):
        table.add_row(
            str(i),
            todo.id[:SHORT_ID_LENGTH],
            "[green]✓[/green]" if todo.completed else "",
            todo.text,
        )

    console.print(table)
    flags = []
    if store.can_undo():
        flags.append("undo")
    if store.can_redo():
        flags.append("redo")
    console.print(f"[yellow]{store.stats_text()}[/yellow]  [dim]{' '.join(flags)}[/dim]")


# ==============================================================================================
# Command Loop
# ==============================================================================================


def run_command(store: TodoStore, line: str) -> bool:
    """Apply one command; returns False when the user wants to quit."""
    command, _, arg = line.strip().partition(" ")
    visible = store.filtered_todos()

    if command == "quit":
        return False
    if command == "add":
        store.type_draft(arg)
        store.add_todo()
    elif command in ("toggle", "delete"):
        try:
            todo = visible[int(arg)]
        except (ValueError, IndexError):
            console.print(f"[red]No todo number {arg!r}[/red]")
            return True
        if command == "toggle":
            store.toggle_todo(todo.id)
        else:
            store.delete_todo(todo.id)
    elif command == "all":
        store.toggle_all()
    elif command == "clear":
        store.clear_completed()
    elif command == "filter":
        try:
            store.set_filter(arg)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
    elif command == "undo":
        store.undo()
    elif command == "redo":
        store.redo()
    else:
        console.print(f"[red]Unknown command {command!r}[/red]")
    return True


def main() -> None:
    store = TodoStore()
    store.subscribe(render)
    render(store)

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            break
        if not run_command(store, line):
            break


if __name__ == "__main__":
    main()
