# cli.py - interactive inventory console
import asyncio
import logging
import sys
from datetime import datetime
from typing import Awaitable, Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from inventory.config import settings
from inventory.core import CreateProductData, Product, UpdateProductData
from inventory.database import CATEGORIES
from inventory.formatters import format_date, format_datetime, format_price, truncate_text
from inventory.store import OperationStatus, ProductsState, ProductStore, StoreAction
from sdk.pyinventory import connect

console = Console()
session: PromptSession = PromptSession()

status_message = "Ready"

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: Iterable[Product]):
    products = list(products)
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=22)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=12)
    table.add_column("Updated", width=13)

    for p in products:
        stock = "[green]In stock[/green]" if p.in_stock else "[red]Out of stock[/red]"
        table.add_row(
            truncate_text(p.id, 9),
            p.name,
            truncate_text(p.description, 27),
            format_price(p.price),
            p.category,
            stock,
            format_date(p.updated_at),
        )
    console.print(table)


def show_product(p: Product):
    stock = "[green]In stock[/green]" if p.in_stock else "[red]Out of stock[/red]"
    console.print(Panel.fit(
        f"[bold]{p.name}[/bold]  {stock}\n"
        f"{p.description}\n\n"
        f"Price:    [green]{format_price(p.price)}[/green]\n"
        f"Category: {p.category}\n"
        f"Created:  {format_datetime(p.created_at)}\n"
        f"Updated:  {format_datetime(p.updated_at)}",
        title=f"ℹ️ Product {p.id}",
        border_style="cyan",
    ))


def show_summary(store: ProductStore):
    s = store.summary()
    grid = Table.grid(padding=(0, 4))
    grid.add_row(
        f"[bold]Total[/bold]\n{s.total_products}",
        f"[bold green]In stock[/bold green]\n{s.in_stock}",
        f"[bold red]Out of stock[/bold red]\n{s.out_of_stock}",
        f"[bold]Total value[/bold]\n{format_price(s.total_value)}",
    )
    console.print(Panel(grid, title="📊 Inventory", border_style="magenta"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    backend = settings.api_url or "in-process mock"
    header.add_row(
        "🗃️ Inventory Manager",
        f"[bold blue]backend: {backend}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Store wiring
# ---------------------------
def on_store_change(state: ProductsState, action: StoreAction):
    """Keeps the status line in sync with the store."""
    global status_message
    if action.status == OperationStatus.PENDING:
        return
    if action.status == OperationStatus.REJECTED:
        status_message = f"Error: {state.error}"
    else:
        status_message = action.type


async def run_op(op: Awaitable[StoreAction], success_msg: Optional[str] = None) -> StoreAction:
    """Awaits a store operation behind a spinner and reports the outcome."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description="Working...", total=None)
        action = await op

    if action.ok:
        if success_msg:
            console.print(show_status(success_msg, True))
    else:
        console.print(show_status(f"Error: {action.error}", False))
    return action


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
async def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    return await session.prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)


def product_completer(store: ProductStore):
    names = [p.id for p in store.state.products]
    return WordCompleter(names, ignore_case=True)


def ask_price(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            price = float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")
            continue
        if price < 0:
            console.print("[red]Price cannot be negative.[/red]")
            continue
        return price


async def ask_product_fields(initial: Optional[Product] = None) -> CreateProductData:
    name = await prompt_with_autocomplete("Name:", default=initial.name if initial else "")
    description = await prompt_with_autocomplete("Description:", default=initial.description if initial else "")
    price = ask_price("💰 Price in dollars", default=initial.price if initial else 10.0)
    category = await prompt_with_autocomplete(
        "🏷️ Category:",
        completer=WordCompleter(CATEGORIES, ignore_case=True, sentence=True),
        default=initial.category if initial else "",
    )
    in_stock = Confirm.ask("In stock?", default=initial.in_stock if initial else True)
    return CreateProductData(name=name, description=description, price=price,
                             category=category, in_stock=in_stock)


# ---------------------------
# Main menu
# ---------------------------
async def menu(store: ProductStore):
    console.clear()
    console.print(create_header())
    store.subscribe(on_store_change)

    await run_op(store.fetch_all())

    while True:
        if status_message:
            console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🗑️ Delete product"),
            ("2", "ℹ️ View product", "6", "📊 Inventory summary"),
            ("3", "➕ Create product", "7", "🧹 Clear error"),
            ("4", "✏️ Edit product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = (await prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        )).strip()

        if choice == "1":
            action = await run_op(store.fetch_all(), success_msg="Products loaded")
            if action.ok:
                show_products(store.state.products)

        elif choice == "2":
            pid = await prompt_with_autocomplete("Enter product ID", completer=product_completer(store))
            action = await run_op(store.fetch_by_id(pid.strip()))
            if action.ok:
                show_product(store.state.selected_product)

        elif choice == "3":
            data = await ask_product_fields()
            action = await run_op(store.create(data), success_msg=f"Product '{data.name}' created")
            if action.ok:
                show_product(action.payload)

        elif choice == "4":
            pid = (await prompt_with_autocomplete("Enter product ID", completer=product_completer(store))).strip()
            action = await run_op(store.fetch_by_id(pid))
            if action.ok:
                current = store.state.selected_product
                fields = await ask_product_fields(current)
                patch = {
                    k: v for k, v in fields.model_dump().items()
                    if getattr(current, k) != v
                }
                if not patch:
                    console.print("[italic yellow]Nothing changed[/italic yellow]")
                else:
                    action = await run_op(store.update(UpdateProductData(id=pid, **patch)),
                                          success_msg=f"Product {pid} updated")
                    if action.ok:
                        show_product(store.state.selected_product)

        elif choice == "5":
            pid = (await prompt_with_autocomplete("Enter product ID", completer=product_completer(store))).strip()
            if Confirm.ask(f"[red]Delete product {pid}? This cannot be undone.[/red]"):
                await run_op(store.delete_by_id(pid), success_msg=f"Product {pid} deleted")

        elif choice == "6":
            show_summary(store)

        elif choice == "7":
            store.clear_error()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


def main():
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    store = ProductStore(connect(settings))
    asyncio.run(menu(store))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
