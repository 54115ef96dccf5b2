# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.catalog_client import CatalogAPIError, CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"),
    api_key=os.getenv("CATALOG_API_KEY", "demo-key"),
)

# Global state for status messages and completion caches
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
        )
    console.print(table)


def show_pagination(pagination: Dict[str, Any]):
    console.print(
        f"[dim]Page {pagination.get('currentPage')} of {pagination.get('totalPages')} "
        f"· {pagination.get('totalProducts')} matching product(s)[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    overview = stats.get("overview", {})
    prices = stats.get("priceStats", {})
    console.print(Panel.fit(
        f"Total: [bold]{overview.get('totalProducts', 0)}[/bold]  "
        f"In stock: [green]{overview.get('inStockCount', 0)}[/green]  "
        f"Out of stock: [red]{overview.get('outOfStockCount', 0)}[/red]\n"
        f"Average price: ${prices.get('average', 0):.2f}  "
        f"Min: ${prices.get('minimum', 0):.2f}  Max: ${prices.get('maximum', 0):.2f}",
        title="📊 Catalog Overview",
        border_style="green",
    ))

    table = Table(box=box.ROUNDED, header_style="bold yellow", title="🏷️ By Category")
    table.add_column("Category", width=18)
    table.add_column("Total", justify="right")
    table.add_column("In stock", justify="right")
    table.add_column("Out of stock", justify="right")
    for name, row in stats.get("categoryBreakdown", {}).items():
        table.add_row(name, str(row["total"]), str(row["inStock"]), str(row["outOfStock"]))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """Call ``fn`` behind a spinner; report API errors in a status panel and return None."""
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except CatalogAPIError as e:
        lines = [f"{e.error}: {e.message}"] + [f"  • {d}" for d in e.details]
        status_message = f"Error: {e.message}"
        console.print(show_status("\n".join(lines), False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_cache():
    global product_cache
    resp = try_api(c.list_products, limit=1000)
    product_cache = resp["products"] if resp else []


def get_product_completer():
    if not product_cache:
        refresh_cache()
    names = [p.get("name", "") for p in product_cache]
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def get_category_completer():
    cats = sorted({p.get("category", "") for p in product_cache})
    return WordCompleter([cat for cat in cats if cat], ignore_case=True)


def resolve_product_id(value: str) -> str:
    """Accept either an id or an exact product name."""
    for p in product_cache:
        if p.get("name", "").lower() == value.lower():
            return p["id"]
    return value


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Product name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                             default=current.get("category", "general")),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Menu actions
# ---------------------------
def action_list():
    search = prompt_with_autocomplete("Search term (blank for all)")
    category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
    sort_by = prompt_with_autocomplete(
        "Sort by (name/price/category/createdAt, blank for none)",
        completer=WordCompleter(["name", "price", "category", "createdAt"]),
    )
    sort_order = "desc" if sort_by and Confirm.ask("Descending?", default=False) else None
    page = Prompt.ask("Page", default="1")
    resp = try_api(
        c.list_products,
        search=search or None, category=category or None,
        sortBy=sort_by or None, sortOrder=sort_order, page=page,
        success_msg="Products loaded successfully",
    )
    if resp:
        show_products(resp["products"])
        show_pagination(resp["pagination"])


def action_search():
    term = prompt_with_autocomplete("Enter search term", completer=get_product_completer())
    res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
    if res is not None:
        show_products(res, title=f"🔍 Results for '{term}'")


def action_get():
    pid = resolve_product_id(prompt_with_autocomplete("Enter product ID or name", completer=get_product_completer()))
    resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
    if resp:
        show_products([resp])


def action_create():
    fields = ask_product_fields()
    resp = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
    if resp:
        console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
        refresh_cache()


def action_update():
    pid = resolve_product_id(prompt_with_autocomplete("Product ID or name to update", completer=get_product_completer()))
    current = try_api(c.get_product, pid)
    if not current:
        return
    fields = ask_product_fields(current)
    resp = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
    if resp:
        show_products([resp])
        refresh_cache()


def action_delete():
    pid = resolve_product_id(prompt_with_autocomplete("Product ID or name to delete", completer=get_product_completer()))
    if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
        resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
        if resp:
            refresh_cache()


def action_stats():
    resp = try_api(c.stats, success_msg="Statistics loaded")
    if resp:
        show_stats(resp)


ACTIONS = {
    "1": action_list,
    "2": action_search,
    "3": action_get,
    "4": action_create,
    "5": action_update,
    "6": action_delete,
    "7": action_stats,
}


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search products", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product", "7", "📊 Statistics"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(list(ACTIONS) + ["q", "quit", "exit"])
        ).strip()

        if choice in ACTIONS:
            ACTIONS[choice]()
        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
