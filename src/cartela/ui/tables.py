"""
Componentes de Tabela para a UI.
"""

from typing import List, Mapping, Optional

from rich import box
from rich.table import Table

from cartela.ui.console import get_console


def create_table(title: str, columns: List[str]) -> Table:
    """Cria uma tabela padronizada."""
    table = Table(title=title, box=box.ROUNDED, header_style="bold cyan")
    for col in columns:
        table.add_column(col)
    return table


def build_items_table(items: Mapping[str, bool]) -> Table:
    table = create_table("🎫 Cartela", ["Item", "Status"])
    for item_key, coletado in items.items():
        status = "[collected]✔ coletado[/collected]" if coletado else "[missing]· pendente[/missing]"
        table.add_row(item_key, status)
    return table


def show_collection_status(
    items: Mapping[str, bool],
    redeemed: bool,
    visitor_id: Optional[str] = None,
    can_redeem: bool = False,
) -> None:
    """Exibe os quatro itens e a situação do resgate."""
    console = get_console()
    table = build_items_table(items)

    coletados = sum(1 for v in items.values() if v)
    if redeemed:
        resgate = "[success]resgatado[/success]"
    elif can_redeem:
        resgate = "[highlight]liberado[/highlight]"
    else:
        resgate = "[missing]bloqueado[/missing]"

    table.add_section()
    table.add_row("Coletados", f"{coletados}/{len(items)}")
    table.add_row("Resgate", resgate)
    if visitor_id:
        table.add_row("Visitante", f"[info]{visitor_id}[/info]")

    console.print(table)
