"""
View de console da cartela.

Implementa ``StampCardView`` imprimindo no console Rich. Guarda a
última página, o estado do botão de resgate e da confirmação para que
a CLI (e os testes) possam consultá-los.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cartela.core.interfaces import StampCardView
from cartela.ui.console import get_console
from cartela.ui.tables import build_items_table


class ConsoleStampCardView(StampCardView):
    """Apresentação da cartela no terminal."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or get_console()
        self.page: Optional[str] = None
        self.redeem_enabled = False
        self.confirmation_open = False
        self.errors: List[Tuple[str, str]] = []

    def show_start_page(self) -> None:
        self.page = "start"
        self.console.print(Panel("Bem-vindo! Use [highlight]cartela abrir --iniciar[/highlight] para começar.", title="Início"))

    def show_game_page(self) -> None:
        self.page = "game"

    def render_items(self, items: Mapping[str, bool]) -> None:
        self.console.print(build_items_table(items))

    def animate_item_collected(self, item_key: str) -> None:
        self.console.print(f"[collected]✨ {item_key} coletado![/collected]")

    def set_redeem_enabled(self, enabled: bool) -> None:
        self.redeem_enabled = enabled
        if enabled:
            self.console.print("[highlight]🎁 Resgate liberado[/highlight]")

    def open_confirmation(self) -> None:
        self.confirmation_open = True

    def close_confirmation(self) -> None:
        self.confirmation_open = False

    def show_error(self, title: str, text: str) -> None:
        self.errors.append((title, text))
        # mensagem do servidor não é markup
        self.console.print(Panel(Text(text), title=title, border_style="error"))
